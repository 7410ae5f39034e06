from __future__ import annotations

from fsshape.services.buckets import bucket_bounds

UNITS = ["B", "KB", "MB", "GB", "TB", "PB", "EB"]


def format_bytes(size: float) -> str:
    if size <= 0:
        return "0 B"
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(UNITS) - 1:
        value /= 1024.0
        unit += 1
    if unit == 0:
        return f"{int(value)} {UNITS[unit]}"
    return f"{value:.1f} {UNITS[unit]}"


def format_bucket(bucket: int) -> str:
    low, high = bucket_bounds(bucket)
    return f"{format_bytes(low)} - {format_bytes(high)}"


def format_percent(fraction: float) -> str:
    return f"{fraction * 100:.2f}%"


def relative_bar(size: float, total: float, width: int = 16) -> str:
    if width <= 0 or total <= 0:
        return ""
    ratio = min(1.0, max(0.0, size / total))
    filled = int(round(ratio * width))
    return "█" * filled + "░" * max(0, width - filled)
