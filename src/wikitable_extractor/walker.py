# src/wikitable_extractor/walker.py
"""
Recorrido del árbol de la página y construcción de la rejilla.

El recorrido es en profundidad y se despacha por tipo de nodo; los tipos
desconocidos se ignoran. Solo los contenedores (página, sección, cuerpo,
tabla, fila) descienden a sus hijos. El contenido de cada celda lo renderiza
`renderer.render_cell` con su propio contexto.
"""
from __future__ import annotations
import logging
from typing import Callable, Dict, List, Optional

from .renderer import Mode, render_cell
from .spanning import SpanningCellTracker
from .spatial import Grid, SpanningCell
from .structures import Node, NodeKind

log = logging.getLogger(__name__)


class TableWalker:
    """Reduce el árbol de una página a una `Grid` en una sola pasada."""

    def __init__(self, blank_spanning_cells: bool = True) -> None:
        self.blank_spanning_cells = blank_spanning_cells
        self._handlers: Dict[NodeKind, Callable[[Node], None]] = {
            NodeKind.PAGE: self._iterate,
            NodeKind.SECTION: self._iterate,
            NodeKind.BODY: self._iterate,
            NodeKind.TABLE: self._iterate,
            NodeKind.TABLE_ROW: self._on_row,
            NodeKind.TABLE_HEADER: self._on_header,
            NodeKind.TABLE_CELL: self._on_cell,
            NodeKind.TABLE_CAPTION: self._on_caption,
        }
        self._reset()

    def _reset(self) -> None:
        self.grid = Grid()
        self.row_index = -1
        self.current_row: Optional[List[Optional[str]]] = None
        self.tracker = SpanningCellTracker(blank=self.blank_spanning_cells)

    def walk(self, root: Node) -> Grid:
        self._reset()
        self._visit(root)
        log.info("Tabla extraída: %d columnas de cabecera, %d filas, %d celdas enlazadas.",
                 len(self.grid.header), len(self.grid.rows), len(self.grid.linked_cells))
        return self.grid

    def _visit(self, node: Node) -> None:
        handler = self._handlers.get(node.kind)
        if handler is not None:
            handler(node)

    def _iterate(self, node: Node) -> None:
        for child in node.children:
            self._visit(child)

    @property
    def in_body(self) -> bool:
        return self.row_index >= 0

    def _on_caption(self, node: Node) -> None:
        self.grid.caption = render_cell(node, self.in_body, Mode.IN_CAPTION).value

    def _on_header(self, node: Node) -> None:
        # En la cabecera se ignora rowspan; colspan se expande duplicando la etiqueta.
        rendered = render_cell(node, self.in_body)
        self.grid.header.extend([rendered.value] * rendered.colspan)

    def _on_row(self, node: Node) -> None:
        if self.current_row is not None:
            return
        if self.row_index == -1:
            # sin cabecera explícita: la primera fila es la fila 0
            self.row_index = 0
        self.current_row = []
        self.tracker.start_row()
        self._backfill()
        self._iterate(node)
        self._backfill()
        if self.current_row:
            self.grid.rows.append(self.current_row)
            log.debug("Fila %d: %s", self.row_index, self.current_row)
            self.row_index += 1
        self.current_row = None

    def _on_cell(self, node: Node) -> None:
        if self.current_row is None:
            return
        rendered = render_cell(node, self.in_body)
        col = len(self.current_row)
        self.current_row.append(rendered.value)

        link = rendered.link
        if link is not None:
            self.grid.add_link(link, self.row_index, col)

        if rendered.colspan > 1 or rendered.rowspan > 1:
            self.tracker.open(SpanningCell(
                value=rendered.value,
                link=link,
                row=self.row_index,
                col=col,
                rowspan=rendered.rowspan,
                colspan=rendered.colspan,
            ))
        self._backfill()

    def _backfill(self) -> None:
        self.tracker.backfill(self.current_row, self.row_index, on_link=self.grid.add_link)


def extract_table(root: Node, blank_spanning_cells: bool = True) -> Grid:
    return TableWalker(blank_spanning_cells=blank_spanning_cells).walk(root)
