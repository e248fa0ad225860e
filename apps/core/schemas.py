# apps/core/schemas.py
# ================================================================================
"""
Shared plumbing for the raw provider schemas.

Each app declares its provider variants as pydantic models joined into a
tagged union; ``validate_payload`` runs one of those unions and converts
pydantic's error report into the pipeline's ``ValidationError``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pydantic
from pydantic import BaseModel, ConfigDict

from apps.core.exceptions import ValidationError

if TYPE_CHECKING:
    from collections.abc import Collection


class RawPayload(BaseModel):
    """Base for provider payload models: unknown keys are ignored, instances frozen."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


def discriminate(raw: Any, tags: dict[str, tuple[str, ...]], default: str | None = None) -> str | None:
    """
    Pick a union tag from the keys present in ``raw``.

    ``tags`` maps each tag to the keys that identify it, checked in order.
    Non-mapping input yields ``None`` so pydantic reports a tag error.
    """
    if isinstance(raw, BaseModel):
        return getattr(raw, "variant", default)
    if not isinstance(raw, dict):
        return None
    for tag, keys in tags.items():
        if any(key in raw for key in keys):
            return tag
    return default


def first_error_field(exc: pydantic.ValidationError, tags: Collection[str] = ()) -> str:
    """Dotted location of the first failing field, without the union tag prefix."""
    errors = exc.errors(include_url=False)
    if not errors:
        return "payload"
    loc = list(errors[0]["loc"])
    if loc and loc[0] in tags:
        loc = loc[1:]
    return ".".join(str(part) for part in loc) or "payload"


def validate_payload[T](
    adapter: pydantic.TypeAdapter[T],
    raw: Any,
    *,
    tags: Collection[str] = (),
    id_keys: tuple[str, ...] = ("match_id", "id"),
) -> T:
    """Validate ``raw`` once; failures raise ``ValidationError`` naming the first bad field."""
    try:
        return adapter.validate_python(raw)
    except pydantic.ValidationError as exc:
        record_id = None
        if isinstance(raw, dict):
            record_id = next((raw[key] for key in id_keys if raw.get(key) is not None), None)
        error = exc.errors(include_url=False)[0] if exc.error_count() else {"msg": "invalid payload"}
        raise ValidationError(first_error_field(exc, tags), error["msg"], record_id=record_id) from exc
