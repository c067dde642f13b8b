"""Request models and response envelope helpers for the HTTP API."""

import re
from typing import Any, Optional, Union

from pydantic import BaseModel, StrictFloat, StrictInt, field_validator

_MISSING = object()
_INTEGER_RE = re.compile(r"^[+-]?\d+$")


class PlaceRobotRequest(BaseModel):
    x: Union[StrictInt, StrictFloat]
    y: Union[StrictInt, StrictFloat]
    direction: str

    @field_validator("x", "y")
    @classmethod
    def whole_floats_to_int(cls, value: Union[int, float]) -> Union[int, float]:
        # JSON 1.0 is the number 1
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value


def envelope(
    success: bool,
    data: Any = _MISSING,
    message: Optional[str] = None,
    error: Optional[str] = None,
) -> dict[str, Any]:
    """
    Build the {success, data, message, error} response body.

    Keys that were not supplied are left out rather than sent as null,
    except ``data`` which is kept whenever it was passed explicitly.
    """
    body: dict[str, Any] = {"success": success}
    if data is not _MISSING:
        body["data"] = data
    if message is not None:
        body["message"] = message
    if error is not None:
        body["error"] = error
    return body


def success_response(data: Any, message: Optional[str] = None) -> dict[str, Any]:
    return envelope(True, data=data, message=message)


def error_response(error: str, data: Any = _MISSING) -> dict[str, Any]:
    return envelope(False, data=data, error=error)


def parse_coordinate(value: Optional[str]) -> Any:
    """
    Convert a query-string coordinate to int.

    Non-integer text such as "2.5" or "abc" is returned unchanged so that
    validation rejects it instead of truncating it.
    """
    if value is None:
        return None
    text = value.strip()
    if _INTEGER_RE.match(text):
        return int(text)
    return value
