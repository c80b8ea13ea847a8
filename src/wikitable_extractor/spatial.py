# src/wikitable_extractor/spatial.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

if TYPE_CHECKING:
    from .reconcile import ReconResult

# Marcador de celda en blanco: distinto de la cadena vacía.
BLANK = None


@dataclass(frozen=True)
class LinkedCell:
    """Celda con un único enlace interno, candidata a reconciliación."""
    target: str
    row: int
    col: int

    def to_url(self, wiki_base_url: str) -> str:
        return wiki_base_url + self.target


@dataclass
class SpanningCell:
    """Celda declarada con rowspan/colspan > 1, activa en las filas row .. row+rowspan-1."""
    value: str
    link: Optional[str]
    row: int
    col: int
    rowspan: int = 1
    colspan: int = 1
    expired: bool = False

    def is_active_at(self, row_index: int) -> bool:
        return self.row + self.rowspan > row_index

    def is_exhausted_at(self, row_index: int) -> bool:
        return self.row + self.rowspan <= row_index + 1


@dataclass
class Grid:
    """Representa la tabla como una rejilla de celdas."""
    caption: Optional[str] = None
    header: List[str] = field(default_factory=list)
    rows: List[List[Optional[str]]] = field(default_factory=list)
    linked_cells: List[LinkedCell] = field(default_factory=list)
    recons: Optional[List[List[Optional["ReconResult"]]]] = None
    reconciled_columns: List[bool] = field(default_factory=list)

    def add_link(self, target: str, row: int, col: int) -> None:
        self.linked_cells.append(LinkedCell(target, row, col))

    @property
    def links(self) -> Dict[Tuple[int, int], str]:
        return {(c.row, c.col): c.target for c in self.linked_cells}

    @property
    def width(self) -> int:
        return max([len(self.header)] + [len(r) for r in self.rows])

    def recon_at(self, row: int, col: int) -> Optional["ReconResult"]:
        if self.recons is None or row >= len(self.recons) or col >= len(self.recons[row]):
            return None
        return self.recons[row][col]
