from typing import Any, Optional

from pydantic import BaseModel


def success(message: str, data: Optional[Any] = None) -> dict:
    """Success envelope: {"success": true, "message", "data"} with camelCase data."""
    body = {"success": True, "message": message}
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json", by_alias=True)
    if data is not None:
        body["data"] = data
    return body
