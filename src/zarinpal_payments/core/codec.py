"""
JSON handling for gateway messages.

Every request and response shape derives from :class:`GatewayModel`, a frozen
pydantic model that writes its wire aliases, leaves out ``None`` fields and
ignores keys it does not declare. Validation failures surface as
:class:`DecodeError`.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import DecodeError

__all__ = [
    "GatewayModel",
    "dumps",
    "loads",
]

M = TypeVar("M", bound="GatewayModel")


def _describe(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        path = ""
        for part in error["loc"]:
            if isinstance(part, int):
                path += f"[{part}]"
            else:
                path += f".{part}" if path else str(part)
        problems.append(f"{path or 'payload'}: {error['msg']}")
    return f"{exc.title}: " + "; ".join(problems)


class GatewayModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self, pretty: bool = False) -> str:
        return self.model_dump_json(
            by_alias=True,
            exclude_none=True,
            indent=4 if pretty else None,
        )

    @classmethod
    def from_dict(cls: Type[M], payload: Any) -> M:
        try:
            return cls.model_validate(payload)
        except ValidationError as exc:
            raise DecodeError(_describe(exc)) from exc

    @classmethod
    def from_json(cls: Type[M], text: str | bytes) -> M:
        try:
            return cls.model_validate_json(text)
        except ValidationError as exc:
            raise DecodeError(_describe(exc)) from exc
        except RecursionError as exc:
            raise DecodeError(f"{cls.__name__}: JSON nested too deeply") from exc


def dumps(payload: Any) -> str:
    """Compact JSON for request bodies."""
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


def loads(text: str | bytes) -> Any:
    try:
        return json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodeError(f"Malformed JSON: {exc}") from exc
    except RecursionError as exc:
        raise DecodeError("Malformed JSON: nested too deeply") from exc
