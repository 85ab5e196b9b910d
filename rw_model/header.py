"""Table header definitions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Iterator

Decorator = Callable[[str], str]


class Align(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"


@dataclass(frozen=True)
class HeaderColumn:
    """One column descriptor; ``time`` marks elapsed-age cells."""

    name: str
    align: Align = Align.LEFT
    time: bool = False
    decorator: Decorator | None = None


class Header:
    """Ordered, immutable sequence of uniquely named columns."""

    __slots__ = ("_columns", "_index")

    def __init__(self, columns: Iterable[HeaderColumn] = ()) -> None:
        self._columns: tuple[HeaderColumn, ...] = tuple(columns)
        self._index: dict[str, int] = {}
        for i, col in enumerate(self._columns):
            if col.name in self._index:
                raise ValueError(f"duplicate header column {col.name!r}")
            self._index[col.name] = i

    def __len__(self) -> int:
        return len(self._columns)

    def __iter__(self) -> Iterator[HeaderColumn]:
        return iter(self._columns)

    def __getitem__(self, index: int) -> HeaderColumn:
        return self._columns[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Header):
            return NotImplemented
        return self._columns == other._columns

    def __hash__(self) -> int:
        return hash(self._columns)

    def __repr__(self) -> str:
        return f"Header({list(self.column_names())!r})"

    def index_of(self, name: str) -> int:
        """Return the column position, or -1 when absent."""
        return self._index.get(name, -1)

    def has_column(self, name: str) -> bool:
        return name in self._index

    def column_names(self) -> tuple[str, ...]:
        return tuple(col.name for col in self._columns)

    def is_time_column(self, index: int) -> bool:
        return 0 <= index < len(self._columns) and self._columns[index].time
