from __future__ import annotations

import logging
import os as _os
from typing import List, Optional

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}

DEBUG_PY_TRACE_VAR = "KITE_DEBUG_PY_TRACE"

def parse_switch(raw: Optional[str]) -> Optional[bool]:
    """Read an on/off word; None when it is neither."""
    if raw is None:
        return None

    word = raw.strip().lower()
    if word in _TRUTHY:
        return True
    if word in _FALSY:
        return False

    return None

def debug_py_trace_enabled() -> bool:
    """KITE_DEBUG_PY_TRACE: print Python tracebacks for host-level errors."""
    return parse_switch(_os.environ.get(DEBUG_PY_TRACE_VAR)) is True

def set_debug_py_trace(enabled: bool) -> None:
    if enabled:
        _os.environ[DEBUG_PY_TRACE_VAR] = "1"
    else:
        _os.environ.pop(DEBUG_PY_TRACE_VAR, None)

def log_level() -> int:
    raw = _os.environ.get("KITE_LOG_LEVEL", "WARNING").strip().upper()
    level = logging.getLevelName(raw)

    if isinstance(level, int):
        return level

    return logging.WARNING

def recursion_limit() -> Optional[int]:
    raw = _os.environ.get("KITE_RECURSION_LIMIT")
    if raw is None:
        return None

    try:
        value = int(raw.strip())
    except ValueError:
        return None

    return value if value > 0 else None

# Python caps int<->str conversion (4300 digits by default); big values go
# through fixed-size chunks that each stay under the cap.
_DIGIT_CHUNK = 1000
_CHUNK_BASE = 10 ** _DIGIT_CHUNK

def int_to_decimal(value: int) -> str:
    try:
        return str(value)
    except ValueError:
        pass

    sign = "-" if value < 0 else ""
    value = abs(value)
    chunks: List[int] = []

    while value:
        value, rem = divmod(value, _CHUNK_BASE)
        chunks.append(rem)

    head, *rest = reversed(chunks)
    return sign + str(head) + "".join(f"{c:0{_DIGIT_CHUNK}d}" for c in rest)

def decimal_to_int(text: str) -> int:
    """Convert an optionally signed run of ASCII digits with no digit cap."""
    try:
        return int(text)
    except ValueError:
        pass

    raw = text.strip()
    sign = -1 if raw.startswith("-") else 1
    digits = raw[1:] if raw[:1] in ("+", "-") else raw

    if not (digits.isascii() and digits.isdigit()):
        raise ValueError(f"invalid decimal literal: {text[:20]!r}")

    value = 0
    for start in range(0, len(digits), _DIGIT_CHUNK):
        chunk = digits[start:start + _DIGIT_CHUNK]
        value = value * 10 ** len(chunk) + int(chunk)

    return sign * value
