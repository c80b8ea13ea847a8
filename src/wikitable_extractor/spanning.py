# src/wikitable_extractor/spanning.py
"""
Reconstrucción de la rejilla para celdas con rowspan/colspan.

Las tablas wikitext anclan cada celda expandida en su esquina superior
izquierda y no hay forma de mirar hacia adelante. Se recorre cada fila una
sola vez con una lista de celdas expandidas activas, ordenada por columna, y
un cursor que avanza junto con la fila: cuando la fila alcanza la columna de
una celda activa se rellena con marcadores (o con eco del valor) hasta cubrir
su colspan.
"""
from __future__ import annotations
import logging
from typing import Callable, List, Optional

from .spatial import BLANK, SpanningCell

log = logging.getLogger(__name__)

LinkCallback = Callable[[str, int, int], None]


class SpanningCellTracker:

    def __init__(self, blank: bool = True) -> None:
        self.blank = blank
        self.active: List[SpanningCell] = []
        self.cursor = 0

    def start_row(self) -> None:
        """Compacta las celdas agotadas en la fila anterior y reinicia el cursor."""
        self.active = [c for c in self.active if not c.expired]
        self.cursor = 0

    def open(self, cell: SpanningCell) -> None:
        """Inserta una celda expandida en la posición del cursor (orden por columna)."""
        log.debug("Celda expandida en (%d, %d): rowspan=%d colspan=%d",
                  cell.row, cell.col, cell.rowspan, cell.colspan)
        self.active.insert(self.cursor, cell)

    def _pad(self, row: List[Optional[str]], row_index: int, cell: SpanningCell,
             on_link: Optional[LinkCallback]) -> None:
        while len(row) < cell.col + cell.colspan:
            if self.blank:
                row.append(BLANK)
                continue
            row.append(cell.value)
            if cell.link is not None and on_link is not None:
                on_link(cell.link, row_index, len(row) - 1)

    def backfill(self, row: List[Optional[str]], row_index: int,
                 on_link: Optional[LinkCallback] = None) -> None:
        """Rellena `row` con las celdas activas cuya columna ya fue alcanzada.

        Debe llamarse al empezar la fila, tras cada celda explícita y al
        terminar la fila. Las celdas cuyo rowspan se agota en esta fila se
        marcan como expiradas y se retiran en el próximo `start_row`.
        """
        while self.cursor < len(self.active) and self.active[self.cursor].col <= len(row):
            cell = self.active[self.cursor]
            if cell.is_active_at(row_index):
                self._pad(row, row_index, cell, on_link)
            if cell.is_exhausted_at(row_index):
                cell.expired = True
            self.cursor += 1

    def __len__(self) -> int:
        return sum(1 for c in self.active if not c.expired)
