"""Helpers shared by the collection routers."""
import json
import math
import uuid
from typing import Any, Sequence

from fastapi import HTTPException
from pydantic import BaseModel

from ..models.base import validate_day


def new_id() -> str:
    return uuid.uuid4().hex


def to_json(values: Any) -> str:
    """Serialize a list field for its JSON text column."""
    if isinstance(values, list):
        values = [v.model_dump(by_alias=False) if isinstance(v, BaseModel) else v for v in values]
    return json.dumps(values)


def from_json(text: str | None) -> list:
    return json.loads(text) if text else []


def dump(model: BaseModel) -> dict:
    """camelCase JSON-ready dict for a response body."""
    return model.model_dump(by_alias=True, mode="json")


def success(data: Any = None, message: str | None = None) -> dict:
    """Wrap a payload in the success envelope."""
    body: dict[str, Any] = {"status": "success"}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = dump(data) if isinstance(data, BaseModel) else data
    return body


def paginated(items: Sequence[BaseModel], total: int, page: int, limit: int) -> dict:
    """Success envelope for a page of a listing."""
    return {
        "status": "success",
        "results": len(items),
        "total": total,
        "page": page,
        "pages": math.ceil(total / limit) if limit else 0,
        "data": [dump(item) for item in items],
    }


def not_found(kind: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"{kind} not found")


def build_where(clauses: list[str]) -> str:
    return f"WHERE {' AND '.join(clauses)}" if clauses else ""


def like_pattern(text: str) -> str:
    """Substring pattern for ``LIKE ? ESCAPE '\\'`` with the user's wildcards taken literally."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def day_param(value: str, name: str) -> str:
    """Validate a YYYY-MM-DD query or body value, answering 400 when malformed."""
    try:
        return validate_day(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"{name} must be in valid ISO format")
