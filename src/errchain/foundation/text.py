"""Text conversions that tolerate values whose own ``__repr__`` raises."""

from __future__ import annotations


def safe_repr(value: object) -> str:
    """``repr(value)``, or ``<Type repr failed>`` when the value's ``__repr__`` raises."""
    try:
        return repr(value)
    except Exception:
        return f"<{type(value).__name__} repr failed>"
