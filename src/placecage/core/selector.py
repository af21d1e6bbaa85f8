"""Deterministic source photo selection."""


def select_index(width: int, height: int, image_count: int) -> int:
    """Pick the 1-based source photo index for a requested size.

    The same ``(width, height, image_count)`` always yields the same index,
    which is what lets a generated output be reused for identical requests.

    Args:
        width: Requested width in pixels.
        height: Requested height in pixels.
        image_count: Number of photos in the catalog entry. Must be positive.

    Returns:
        Index in ``[1, image_count]``.

    Raises:
        ValueError: If ``image_count`` is not positive. Callers reject
            unsupported catalog pairs before reaching this point.
    """
    if image_count <= 0:
        raise ValueError(f"image_count must be positive, got {image_count}")
    return ((width + height) % image_count) + 1
