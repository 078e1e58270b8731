#!/usr/bin/env python3
"""
Development server runner for local testing
Run with: TASK_STORE_BACKEND=memory python dev.py
"""
import uvicorn

from api.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "index:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level=settings.log_level
    )
