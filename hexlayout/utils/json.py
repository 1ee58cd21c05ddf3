from __future__ import annotations

from typing import Any, Union

import orjson as _backend

__all__ = ["dumps", "loads", "JSONDecodeError"]

JSONDecodeError = _backend.JSONDecodeError


def dumps(obj: Any, *, indent: bool = False) -> str:
    """Serialize *obj* to a ``str`` using orjson (bytes → str)."""
    option = _backend.OPT_SORT_KEYS | _backend.OPT_NON_STR_KEYS
    if indent:
        option |= _backend.OPT_INDENT_2
    return _backend.dumps(obj, option=option).decode()


def loads(data: Union[str, bytes, bytearray]) -> Any:
    return _backend.loads(data)
