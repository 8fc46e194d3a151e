"""Grid model: cell records, mine placement, adjacency counts and flood fill."""

import logging
import random
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, Iterable, Iterator, List, Optional, Set, Tuple

from .config import MAX_DIMENSION
from .errors import InvalidDimensions
from .utils import Coord, get_neighborhoods, safe_zone

logger = logging.getLogger(__name__)


@dataclass
class Cell:
    x: int
    y: int
    is_mine: bool = False
    is_revealed: bool = False
    is_flagged: bool = False
    adjacent_mines: int = 0

    @property
    def coord(self) -> Coord:
        return (self.x, self.y)


class Grid:
    """Fixed-size board of cells plus the pure algorithms that operate on it."""

    def __init__(
        self,
        width: int,
        height: int,
        mine_count: int,
        *,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Create a board of unrevealed, unflagged, mine-free cells.

        Mines are not placed here; call plant_mines() once the first click is known.

        Args:
            width: Number of columns, 1..MAX_DIMENSION.
            height: Number of rows, 1..MAX_DIMENSION.
            mine_count: Number of mines, strictly between 0 and width * height.
            rng: Random source used for mine placement.

        Raises:
            InvalidDimensions: If any parameter is out of range.
        """
        if width <= 0 or height <= 0:
            raise InvalidDimensions("Width and height must be at least 1.")
        if width > MAX_DIMENSION or height > MAX_DIMENSION:
            raise InvalidDimensions(
                f"Width and height must be at most {MAX_DIMENSION}."
            )
        if mine_count <= 0:
            raise InvalidDimensions("The number of mines must be at least 1.")
        if mine_count >= width * height:
            raise InvalidDimensions(
                "The number of mines must be less than the number of cells."
            )

        self.width: int = width
        self.height: int = height
        self.mine_count: int = mine_count
        self.rng: random.Random = rng if rng is not None else random.Random()

        self.rows: List[List[Cell]] = [
            [Cell(x, y) for x in range(width)] for y in range(height)
        ]
        self.mines_planted: bool = False

        self._neighborhoods: Dict[Coord, Tuple[Coord, ...]] = get_neighborhoods(
            width, height
        )

    @classmethod
    def create(
        cls,
        width: int,
        height: int,
        mine_count: int,
        *,
        rng: Optional[random.Random] = None,
    ) -> "Grid":
        return cls(width, height, mine_count, rng=rng)

    @property
    def safe_cell_count(self) -> int:
        return self.width * self.height - self.mine_count

    def is_in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell(self, x: int, y: int) -> Cell:
        return self.rows[y][x]

    def cells(self) -> Iterator[Cell]:
        """Iterate over all cells row by row."""
        for row in self.rows:
            yield from row

    def neighbors(self, x: int, y: int) -> Tuple[Coord, ...]:
        return self._neighborhoods[(x, y)]

    def mine_coords(self) -> Set[Coord]:
        return {c.coord for c in self.cells() if c.is_mine}

    def plant_mines(self, safe_x: int, safe_y: int) -> None:
        """
        Randomly place mine_count mines outside the safe zone around (safe_x, safe_y).

        Cells are drawn uniformly and redrawn on a collision or a safe-zone hit.
        The caller should keep mine_count <= width * height - len(safe zone);
        when that does not hold only the clicked cell is kept mine-free.

        Raises:
            ValueError: If mines were already planted.
        """
        if self.mines_planted:
            raise ValueError("Mines are already planted.")

        excluded = safe_zone(safe_x, safe_y, self.width, self.height)
        if self.mine_count > self.width * self.height - len(excluded):
            logger.warning(
                "Safe zone around (%d, %d) leaves too few cells for %d mines; "
                "only the clicked cell is kept mine-free.",
                safe_x,
                safe_y,
                self.mine_count,
            )
            excluded = frozenset({(safe_x, safe_y)})

        to_plant = self.mine_count
        while to_plant > 0:
            x = self.rng.randrange(self.width)
            y = self.rng.randrange(self.height)
            cell = self.rows[y][x]
            if cell.is_mine or (x, y) in excluded:
                continue
            cell.is_mine = True
            to_plant -= 1

        self.mines_planted = True
        logger.debug(
            "Planted %d mines on %dx%d grid, first click (%d, %d).",
            self.mine_count,
            self.width,
            self.height,
            safe_x,
            safe_y,
        )

    def set_mines(self, coords: Iterable[Coord]) -> None:
        """
        Place mines at exactly the given coordinates instead of sampling them.

        Raises:
            ValueError: If the layout does not match mine_count, a coordinate is
                outside the grid, or mines were already planted.
        """
        if self.mines_planted:
            raise ValueError("Mines are already planted.")

        layout = list(coords)
        unique = set(layout)
        if len(unique) != len(layout):
            raise ValueError("Mine coordinates must be distinct.")
        if len(unique) != self.mine_count:
            raise ValueError(
                f"Expected {self.mine_count} mine coordinates, got {len(unique)}."
            )
        for x, y in unique:
            if not self.is_in_bounds(x, y):
                raise ValueError(f"Mine coordinate ({x}, {y}) is outside the grid.")

        for x, y in unique:
            self.rows[y][x].is_mine = True
        self.mines_planted = True

    def compute_adjacency(self) -> None:
        """Populate every non-mine cell with its adjacent mine count."""
        for cell in self.cells():
            if cell.is_mine:
                continue
            cell.adjacent_mines = sum(
                1
                for nx, ny in self.neighbors(cell.x, cell.y)
                if self.rows[ny][nx].is_mine
            )

    def flood_fill(self, x: int, y: int) -> List[Cell]:
        """
        Reveal (x, y) and cascade through connected zero-adjacency cells.

        Expansion stops at numbered cells, flagged cells and already revealed
        cells. Mines are never revealed here.

        Returns:
            Newly revealed cells in reveal order.
        """
        frontier: Deque[Coord] = deque([(x, y)])
        queued: Set[Coord] = {(x, y)}
        revealed_cells: List[Cell] = []

        while frontier:
            cx, cy = frontier.popleft()
            cell = self.rows[cy][cx]
            if cell.is_revealed or cell.is_flagged or cell.is_mine:
                continue

            cell.is_revealed = True
            revealed_cells.append(cell)

            if cell.adjacent_mines == 0:
                for nx, ny in self.neighbors(cx, cy):
                    if (nx, ny) in queued or self.rows[ny][nx].is_revealed:
                        continue
                    queued.add((nx, ny))
                    frontier.append((nx, ny))

        return revealed_cells

    def reveal_mines(self) -> List[Cell]:
        """Reveal every mine for display, keeping flags as they are."""
        changed: List[Cell] = []
        for cell in self.cells():
            if cell.is_mine and not cell.is_revealed:
                cell.is_revealed = True
                changed.append(cell)
        return changed

    def is_cleared(self, cells_revealed: int) -> bool:
        """Return True once every non-mine cell has been revealed."""
        return cells_revealed == self.safe_cell_count
