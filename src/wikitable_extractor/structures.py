# src/wikitable_extractor/structures.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional


class NodeKind(str, Enum):
    PAGE = "page"
    SECTION = "section"
    BODY = "body"
    TABLE = "table"
    TABLE_ROW = "table_row"
    TABLE_HEADER = "table_header"
    TABLE_CELL = "table_cell"
    TABLE_CAPTION = "table_caption"
    ATTRIBUTES = "attributes"
    ATTRIBUTE = "attribute"
    TEXT = "text"
    BOLD = "bold"
    ITALIC = "italic"
    INTERNAL_LINK = "internal_link"
    EXTERNAL_LINK = "external_link"
    OTHER = "other"


@dataclass
class Node:
    """Nodo del árbol sintáctico de una página wikitext.

    Solo se usan los campos que corresponden a cada tipo:
    `text` para texto (o el título de una sección), `name` para atributos,
    `target` para enlaces internos y `protocol`/`path` para enlaces externos.
    En los enlaces, `title=None` indica que el enlace no trae título propio.
    """
    kind: NodeKind
    children: List["Node"] = field(default_factory=list)
    text: str = ""
    name: str = ""
    target: str = ""
    protocol: str = ""
    path: str = ""
    title: Optional[List["Node"]] = None

    @property
    def url(self) -> str:
        return f"{self.protocol}:{self.path}"


def _nodes(items: Iterable) -> List[Node]:
    """Acepta nodos o cadenas; las cadenas se convierten en nodos de texto."""
    return [text(x) if isinstance(x, str) else x for x in items]


def text(content: str) -> Node:
    return Node(NodeKind.TEXT, text=content)


def bold(*children) -> Node:
    return Node(NodeKind.BOLD, _nodes(children))


def italic(*children) -> Node:
    return Node(NodeKind.ITALIC, _nodes(children))


def internal_link(target: str, *title) -> Node:
    return Node(NodeKind.INTERNAL_LINK, target=target, title=_nodes(title) if title else None)


def external_link(url: str, *title) -> Node:
    protocol, _, path = url.partition(":")
    return Node(NodeKind.EXTERNAL_LINK, protocol=protocol, path=path,
                title=_nodes(title) if title else None)


def attribute(name: str, value: str) -> Node:
    return Node(NodeKind.ATTRIBUTE, [text(value)], name=name)


def _with_attributes(kind: NodeKind, children, attrs: dict) -> Node:
    body = _nodes(children)
    if attrs:
        attr_nodes = [attribute(k, str(v)) for k, v in attrs.items()]
        body = [Node(NodeKind.ATTRIBUTES, attr_nodes)] + body
    return Node(kind, body)


def cell(*children, **attrs) -> Node:
    """Celda de datos; los kwargs (colspan=2, rowspan=3...) se vuelven atributos."""
    return _with_attributes(NodeKind.TABLE_CELL, children, attrs)


def header_cell(*children, **attrs) -> Node:
    return _with_attributes(NodeKind.TABLE_HEADER, children, attrs)


def caption(*children) -> Node:
    return Node(NodeKind.TABLE_CAPTION, _nodes(children))


def row(*cells: Node) -> Node:
    return Node(NodeKind.TABLE_ROW, list(cells))


def table(*children: Node) -> Node:
    return Node(NodeKind.TABLE, list(children))


def section(title: str, *children: Node) -> Node:
    return Node(NodeKind.SECTION, [Node(NodeKind.BODY, list(children))], text=title)


def page(*children: Node) -> Node:
    return Node(NodeKind.PAGE, list(children))
