from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

MEGABYTE = 1024 * 1024


def _to_int(value: Union[int, float, str, None]) -> int:
    if value is None:
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        pass
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return 0


def _one_decimal(num: int, unit: int) -> str:
    return str((Decimal(num) / Decimal(unit)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def format_duration(seconds: Union[int, float, str, None]) -> str:
    """125 -> '2:05'"""
    total = max(_to_int(seconds), 0)
    return f"{total // 60}:{total % 60:02d}"


def format_views(views: Union[int, float, str, None]) -> str:
    """Abbreviate a view count: 1500000 -> '1.5M views', 2500 -> '2.5K views'."""
    num = _to_int(views)
    if num >= 1_000_000:
        return f"{_one_decimal(num, 1_000_000)}M views"
    if num >= 1_000:
        return f"{_one_decimal(num, 1_000)}K views"
    return f"{num} views"


def format_size(content_length: Optional[int]) -> str:
    if not content_length:
        return "Unknown"
    megabytes = (Decimal(content_length) / Decimal(MEGABYTE)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"{megabytes} MB"
