# src/wikitable_extractor/renderer.py
"""
Renderizado del contenido de una celda (o leyenda) a texto plano.

Cada celda se renderiza con su propio `CellContext`, de modo que colspan,
rowspan, enlaces y búferes no se comparten entre llamadas recursivas.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from .links import LinkCollector
from .structures import Node, NodeKind

log = logging.getLogger(__name__)

SPAN_ATTRIBUTES = ("colspan", "rowspan")


class Mode(Enum):
    IN_CELL = "in_cell"
    IN_CAPTION = "in_caption"
    IN_ATTRIBUTE_VALUE = "in_attribute_value"


@dataclass
class CellContext:
    mode: Mode
    in_body: bool
    parts: List[str] = field(default_factory=list)
    attr_parts: List[str] = field(default_factory=list)
    colspan: int = 1
    rowspan: int = 1
    links: LinkCollector = field(default_factory=LinkCollector)


@dataclass(frozen=True)
class RenderedCell:
    value: str
    colspan: int = 1
    rowspan: int = 1
    links: Tuple[str, ...] = ()
    # destino solo si la celda tiene exactamente un enlace
    link: Optional[str] = None


def _visit_children(nodes: Optional[List[Node]], ctx: CellContext) -> None:
    for child in nodes or ():
        _visit(child, ctx)


def _on_text(node: Node, ctx: CellContext) -> None:
    if ctx.mode is Mode.IN_ATTRIBUTE_VALUE:
        ctx.attr_parts.append(node.text)
    else:
        ctx.parts.append(node.text)


def _on_container(node: Node, ctx: CellContext) -> None:
    _visit_children(node.children, ctx)


def _parse_span(raw: str) -> Optional[int]:
    try:
        value = int(raw.strip())
    except ValueError:
        log.debug("Valor de atributo no entero ignorado: %r", raw)
        return None
    return value if value >= 1 else None


def _on_attribute(node: Node, ctx: CellContext) -> None:
    if ctx.mode is Mode.IN_ATTRIBUTE_VALUE:
        return
    outer = ctx.mode
    ctx.mode = Mode.IN_ATTRIBUTE_VALUE
    ctx.attr_parts = []
    _visit_children(node.children, ctx)
    ctx.mode = outer

    name = node.name.strip().lower()
    if name not in SPAN_ATTRIBUTES:
        return
    span = _parse_span("".join(ctx.attr_parts))
    if span is not None:
        setattr(ctx, name, span)


def _on_internal_link(node: Node, ctx: CellContext) -> None:
    # una leyenda no ocupa ninguna posición de la rejilla: sus enlaces no se recogen
    if ctx.mode is not Mode.IN_CAPTION:
        ctx.links.add(node.target)
    if node.title is None:
        ctx.parts.append(node.target)
    else:
        _visit_children(node.title, ctx)


def _on_external_link(node: Node, ctx: CellContext) -> None:
    # Dentro del cuerpo de la tabla siempre se usa la URL, sin etiqueta.
    if ctx.in_body or node.title is None:
        ctx.parts.append(node.url)
    else:
        _visit_children(node.title, ctx)


_HANDLERS: Dict[NodeKind, Callable[[Node, CellContext], None]] = {
    NodeKind.TEXT: _on_text,
    NodeKind.BOLD: _on_container,
    NodeKind.ITALIC: _on_container,
    NodeKind.ATTRIBUTES: _on_container,
    NodeKind.ATTRIBUTE: _on_attribute,
    NodeKind.INTERNAL_LINK: _on_internal_link,
    NodeKind.EXTERNAL_LINK: _on_external_link,
}


def _visit(node: Node, ctx: CellContext) -> None:
    handler = _HANDLERS.get(node.kind)
    if handler is not None:
        handler(node, ctx)


def render_cell(node: Node, in_body: bool, mode: Mode = Mode.IN_CELL) -> RenderedCell:
    """Renderiza una celda, cabecera o leyenda a texto plano recortado.

    Devuelve también el colspan/rowspan declarado y los enlaces internos
    encontrados, en orden de aparición.
    """
    ctx = CellContext(mode=mode, in_body=in_body)
    _visit_children(node.children, ctx)
    value = "".join(ctx.parts).strip()
    return RenderedCell(
        value=value,
        colspan=ctx.colspan,
        rowspan=ctx.rowspan,
        links=tuple(ctx.links.targets),
        link=ctx.links.unique(),
    )
