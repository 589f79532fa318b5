"""Display helpers for multipliers."""


def format_multiplier(value: float) -> str:
    """Render a multiplier with precision that shrinks as it grows.

    >>> format_multiplier(3.2)
    '3.20×'
    >>> format_multiplier(12.345)
    '12.3×'
    >>> format_multiplier(1500)
    '1500×'
    """
    if value >= 100:
        return f"{value:.0f}×"
    if value >= 10:
        return f"{value:.1f}×"
    return f"{value:.2f}×"
