import math

def check_amount(v: float | None, *, allow_zero: bool = True, allow_negative: bool = False):
    if v is None:
        return None
    if v != v:
        raise ValueError("amount must be a number")
    if math.isinf(v):
        raise ValueError("amount must be finite")
    if not allow_negative and v < 0:
        raise ValueError("amount must not be negative")
    if not allow_zero and abs(v) < 1e-12:
        raise ValueError("amount must be non-zero")
    return v

def trim_required(v: str | None, what: str):
    if v is None:
        return None
    v = v.strip()
    if not v:
        raise ValueError(f"{what} is required")
    return v

def trim_optional(v: str | None):
    if v is None:
        return None
    v = v.strip()
    return v or None
