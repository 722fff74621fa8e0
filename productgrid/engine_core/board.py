"""
Board Model - The 6x6 grid of product cells.

The board holds the 36 distinct products of two factors in [1, 9],
shuffled over the grid. Each cell records its value and which player
(if any) captured it.

Design principles:
- Immutable: a Board is frozen, so snapshots can be handed out freely
- Copy-on-write: capturing a cell returns a new Board
- O(1) value lookup through a shared value -> index map
- Fail closed: a value that is not on the board counts as occupied
"""

from __future__ import annotations
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING
import random

if TYPE_CHECKING:
    from .state import Player


GRID_SIZE = 6
CELL_COUNT = GRID_SIZE * GRID_SIZE
FACTOR_RANGE = range(1, 10)

# Every distinct i * j for i, j in [1, 9] (exactly 36 of them)
PRODUCTS: tuple[int, ...] = tuple(sorted({i * j for i in FACTOR_RANGE for j in FACTOR_RANGE}))

# Static per-cell bonus favoring the center of the grid
POSITIONAL_WEIGHTS: tuple[int, ...] = (
    2, 3, 3, 3, 3, 2,
    3, 4, 5, 5, 4, 3,
    3, 5, 8, 8, 5, 3,
    3, 5, 8, 8, 5, 3,
    3, 4, 5, 5, 4, 3,
    2, 3, 3, 3, 3, 2,
)


@dataclass
class Cell:
    """A single product cell, as seen by renderers."""
    index: int
    value: int
    owner: Player | None = None

    @property
    def row(self) -> int:
        return self.index // GRID_SIZE

    @property
    def col(self) -> int:
        return self.index % GRID_SIZE


@dataclass(frozen=True)
class Board:
    """
    The product grid.

    values and owners are parallel tuples indexed by cell index
    (row-major). value_index maps a product to its cell and is shared
    between a board and every copy derived from it. It is exposed as a
    read-only mapping.
    """
    values: tuple[int, ...]
    owners: tuple[Player | None, ...] = ()
    value_index: Mapping[int, int] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self):
        if not self.owners:
            object.__setattr__(self, "owners", (None,) * len(self.values))
        if not self.value_index:
            object.__setattr__(self, "value_index", {value: i for i, value in enumerate(self.values)})
        if not isinstance(self.value_index, MappingProxyType):
            object.__setattr__(self, "value_index", MappingProxyType(dict(self.value_index)))

    @classmethod
    def generate(cls, rng: random.Random | None = None) -> Board:
        """Shuffle the canonical products onto a fresh board."""
        rng = rng or random.Random()
        values = list(PRODUCTS)
        rng.shuffle(values)
        return cls(values=tuple(values))

    @classmethod
    def from_values(cls, values: list[int] | tuple[int, ...]) -> Board:
        """Build an empty board from a fixed permutation of the products."""
        if len(values) != CELL_COUNT or sorted(values) != list(PRODUCTS):
            raise ValueError("Board values must be a permutation of the 36 canonical products")
        return cls(values=tuple(values))

    @property
    def cells(self) -> list[Cell]:
        return [
            Cell(index=i, value=value, owner=owner)
            for i, (value, owner) in enumerate(zip(self.values, self.owners))
        ]

    @property
    def is_full(self) -> bool:
        return all(owner is not None for owner in self.owners)

    @property
    def owned_count(self) -> int:
        return sum(1 for owner in self.owners if owner is not None)

    def index_of(self, value: int) -> int | None:
        """Cell index holding this product, or None if it is not on the board."""
        return self.value_index.get(value)

    def owner_at(self, index: int) -> Player | None:
        return self.owners[index]

    def is_occupied(self, value: int) -> bool:
        """True if the product's cell is owned. Unknown values count as occupied."""
        index = self.value_index.get(value)
        if index is None:
            return True
        return self.owners[index] is not None

    def with_owner(self, index: int, player: Player) -> Board:
        """Return a new board with the cell at index captured by player."""
        owners = list(self.owners)
        owners[index] = player
        return Board(values=self.values, owners=tuple(owners), value_index=self.value_index)

    def cleared(self) -> Board:
        """Return the same layout with all ownership removed (soft reset)."""
        return Board(values=self.values, value_index=self.value_index)

    def render(self) -> str:
        """Plain text grid, one row per line. Owned cells carry X (P1) or O (P2)."""
        from .state import Player

        marks = {None: " ", Player.P1: "X", Player.P2: "O"}
        rows = []
        for r in range(GRID_SIZE):
            row = []
            for c in range(GRID_SIZE):
                i = r * GRID_SIZE + c
                row.append(f"[{self.values[i]:>2}{marks[self.owners[i]]}]")
            rows.append("".join(row))
        return "\n".join(rows)
