"""JSON rendering for arbitrarily deep plain data.

Shaped trees nest as deep as the source does, past the depth pydantic's
serializer accepts, so containers are written from an explicit stack and only
scalars go through :func:`json.dumps`.
"""

import json
from typing import Any

JsonValue = dict[str, Any] | list[Any] | str | int | float | bool | None


def _scalar(value: JsonValue) -> str:
    return json.dumps(value, ensure_ascii=False)


def dump_json(value: JsonValue, indent: int = 2) -> str:
    """Pretty-print ``value`` with the layout of ``json.dumps(value, indent=indent)``."""
    parts: list[str] = []
    # Bare strings on the stack are literal output; tuples are values still to render.
    stack: list[str | tuple[JsonValue, int]] = [(value, 0)]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
            continue
        current, level = item
        if isinstance(current, dict):
            entries: list[tuple[str | None, JsonValue]] = [
                (_scalar(key), entry) for key, entry in current.items()
            ]
            open_token, close_token = "{", "}"
        elif isinstance(current, list):
            entries = [(None, entry) for entry in current]
            open_token, close_token = "[", "]"
        else:
            parts.append(_scalar(current))
            continue

        if not entries:
            parts.append(open_token + close_token)
            continue
        inner = "\n" + " " * (indent * (level + 1))
        work: list[str | tuple[JsonValue, int]] = [open_token]
        for position, (key, entry) in enumerate(entries):
            prefix = ("," if position else "") + inner
            work.append(prefix if key is None else f"{prefix}{key}: ")
            work.append((entry, level + 1))
        work.append("\n" + " " * (indent * level) + close_token)
        stack.extend(reversed(work))
    return "".join(parts)
