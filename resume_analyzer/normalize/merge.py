from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel

from resume_analyzer.schemas import ContactInfo, ParsedJobDescription, ParsedResume

_IDENTITY_FIELDS = frozenset({"id", "raw_text", "file_name", "file_type"})

ModelT = TypeVar("ModelT", bound=BaseModel)


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return not value
    if isinstance(value, BaseModel):
        try:
            return value == type(value)()
        except ValueError:
            return False
    return False


def _merge_contact(base: ContactInfo, overlay: ContactInfo) -> ContactInfo:
    updates = {
        name: getattr(overlay, name)
        for name in ContactInfo.model_fields
        if not _is_empty(getattr(overlay, name))
    }
    return base.model_copy(update=updates)


def _merge(base: ModelT, overlay: ModelT) -> ModelT:
    if type(base) is not type(overlay):
        raise TypeError(f"cannot merge {type(overlay).__name__} into {type(base).__name__}")
    updates: dict[str, Any] = {}
    for name, field in type(base).model_fields.items():
        if name in _IDENTITY_FIELDS:
            continue
        current = getattr(base, name)
        incoming = getattr(overlay, name)
        if isinstance(current, ContactInfo) and isinstance(incoming, ContactInfo):
            updates[name] = _merge_contact(current, incoming)
        # Placeholder defaults such as the "Position" title never override.
        elif not _is_empty(incoming) and incoming != field.default:
            updates[name] = incoming
    return base.model_copy(update=updates)


def merge_resume(base: ParsedResume, overlay: ParsedResume) -> ParsedResume:
    """Overlay AI-extracted résumé fields onto heuristic output.

    A field from `overlay` wins only when it is non-empty; contact details merge
    field by field. Identity fields always come from `base`, which is left untouched.
    """
    return _merge(base, overlay)


def merge_job_description(base: ParsedJobDescription, overlay: ParsedJobDescription) -> ParsedJobDescription:
    return _merge(base, overlay)
