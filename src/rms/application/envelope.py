"""``{success, message, data}`` response envelopes.

Status codes follow the exception taxonomy; anything that is not a
DomainException is reported as a 500.
"""

from __future__ import annotations

import dataclasses
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from rms.domain.exceptions import DomainException


def success(message: str, data: Any = None, status: int = 200) -> dict:
    return {
        "success": True,
        "status": status,
        "message": message,
        "data": to_jsonable(data),
    }


def failure(exc: BaseException) -> dict:
    if isinstance(exc, DomainException):
        status, message = exc.status_code, str(exc)
    else:
        status, message = 500, "Internal server error"
    return {"success": False, "status": status, "message": message, "data": None}


def to_jsonable(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {k: to_jsonable(v) for k, v in dataclasses.asdict(value).items()}
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value
