# src/wikitable_extractor/reader.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, List, Optional

from .reconcile import ReconResult
from .spatial import Grid


@dataclass(frozen=True)
class Cell:
    value: Optional[str]
    recon: Optional[ReconResult] = None


class WikiTableDataReader:
    """Entrega la rejilla fila a fila: primero la cabecera, luego los datos.

    `next_row()` devuelve `None` cuando ya no quedan filas.
    """

    def __init__(self, grid: Grid) -> None:
        self.grid = grid
        self.current_row = -1

    def next_row(self) -> Optional[List[Cell]]:
        if self.current_row == -1:
            row = [Cell(value) for value in self.grid.header]
        elif self.current_row < len(self.grid.rows):
            r = self.current_row
            row = [Cell(value, self.grid.recon_at(r, c)) for c, value in enumerate(self.grid.rows[r])]
        else:
            return None
        self.current_row += 1
        return row

    def __iter__(self) -> Iterator[List[Cell]]:
        while True:
            row = self.next_row()
            if row is None:
                return
            yield row
