from __future__ import annotations


def require_non_negative(value: int, name: str) -> int:
    """Fail fast on negative counts instead of silently clamping them."""
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value


def require_positive(value: int, name: str) -> int:
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value
