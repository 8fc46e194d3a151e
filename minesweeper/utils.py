"""Grid geometry helpers shared by the model, the controller and the analysis tools."""

from typing import Dict, FrozenSet, Tuple

Coord = Tuple[int, int]

# Module-level cache: (width, height) -> {(x,y): ((nx,ny), ...), ...}
_NEIGHBORHOODS_CACHE: Dict[Tuple[int, int], Dict[Coord, Tuple[Coord, ...]]] = {}


def get_neighborhoods(width: int, height: int) -> Dict[Coord, Tuple[Coord, ...]]:
    """
    Precompute and cache the Moore neighborhood of every cell in a grid.

    Args:
        width: Grid width (number of columns). Must be positive.
        height: Grid height (number of rows). Must be positive.

    Returns:
        Mapping from each cell (x, y) to a tuple of its in-bounds neighbors,
        at most 8 per cell.

    Raises:
        ValueError: If width or height is non-positive.
    """
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be positive.")

    key = (width, height)
    cached = _NEIGHBORHOODS_CACHE.get(key)
    if cached is not None:
        return cached

    neighborhoods: Dict[Coord, Tuple[Coord, ...]] = {}
    for y in range(height):
        rows = range(max(0, y - 1), min(height, y + 2))
        for x in range(width):
            cols = range(max(0, x - 1), min(width, x + 2))
            neighborhoods[(x, y)] = tuple(
                (nx, ny) for ny in rows for nx in cols if (nx, ny) != (x, y)
            )

    _NEIGHBORHOODS_CACHE[key] = neighborhoods
    return neighborhoods


def safe_zone(x: int, y: int, width: int, height: int) -> FrozenSet[Coord]:
    """Return the 3x3 block centered on (x, y), clamped to the grid."""
    return frozenset(get_neighborhoods(width, height)[(x, y)]) | {(x, y)}
