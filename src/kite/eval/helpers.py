from __future__ import annotations

from ..runtime import KtBool, KtNull, KtValue

def is_truthy(val: KtValue) -> bool:
    match val:
        case KtBool(value=b):
            return b
        case KtNull():
            return False
        case _:
            return True
