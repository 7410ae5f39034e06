from __future__ import annotations


def size_bucket(size: int) -> int:
    """Return the logarithmic size class ``floor(log2(size))``.

    Computed from the bit length so large sizes never hit float rounding.
    Zero-byte files have no bucket; callers filter them out first.
    """
    if size <= 0:
        raise ValueError(f"size bucket is undefined for {size} bytes")
    return size.bit_length() - 1


def bucket_bounds(bucket: int) -> tuple[int, int]:
    """Inclusive byte range covered by *bucket*."""
    return 1 << bucket, (1 << (bucket + 1)) - 1
