import os

from pydantic import BaseModel, Field

_TRUTHY = {"1", "true", "yes", "on"}


class ExtractionSettings(BaseModel):
    sort_children: bool = False
    preview_length: int | None = Field(default=None, ge=1)
    trace_depth: int = Field(default=4, ge=0)
    strict: bool = False


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


def _env_int(name: str) -> int | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


def load_settings(**overrides: object) -> ExtractionSettings:
    """Read settings from ``SEMTREE_*`` environment variables; non-None overrides win."""
    values: dict[str, object] = {
        "sort_children": _env_flag("SEMTREE_SORT_CHILDREN", False),
        "strict": _env_flag("SEMTREE_STRICT", False),
    }
    preview_length = _env_int("SEMTREE_PREVIEW_LENGTH")
    if preview_length is not None:
        values["preview_length"] = preview_length
    trace_depth = _env_int("SEMTREE_TRACE_DEPTH")
    if trace_depth is not None:
        values["trace_depth"] = trace_depth
    values.update({key: value for key, value in overrides.items() if value is not None})
    return ExtractionSettings.model_validate(values)
