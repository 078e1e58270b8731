"""Task record and operation parameter models."""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, StrictBool, StrictStr


class Task(BaseModel):
    """A single to-do item as stored in the tasks table."""

    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    created_at: datetime
    owner: str
    username: Optional[str] = None
    checked: bool = False
    private: bool = False

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Task":
        """Build a Task from a raw table row; NULL flags read as False."""
        data = dict(record)
        data["id"] = str(data["id"])
        data["checked"] = bool(data.get("checked"))
        data["private"] = bool(data.get("private"))
        return cls.model_validate(data)


# Parameters of each operation. Strict types: "true" is not a bool and 42 is
# not a str.

class InsertTaskParams(BaseModel):
    text: StrictStr


class RemoveTaskParams(BaseModel):
    task_id: StrictStr


class SetCheckedParams(BaseModel):
    task_id: StrictStr
    checked: StrictBool


class SetPrivateParams(BaseModel):
    task_id: StrictStr
    private: StrictBool
