"""
Services package - Business logic layer for the API
All functional logic should be implemented here, separate from HTTP routing
"""
