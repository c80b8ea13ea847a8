# src/wikitable_extractor/parser.py
"""
Convierte wikitext en el árbol de `structures.Node` usando mwparserfromhell.

Solo se traducen los nodos que el extractor entiende (tablas, filas, celdas,
leyendas, atributos, texto, negrita/cursiva, enlaces y secciones); el resto
queda como `NodeKind.OTHER` y se ignora al recorrer.
"""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

import mwparserfromhell
from mwparserfromhell.nodes import ExternalLink, Heading, HTMLEntity, Tag, Text, Wikilink
from mwparserfromhell.parser import ParserError

from .structures import Node, NodeKind

log = logging.getLogger(__name__)

_TAG_KINDS = {
    "table": NodeKind.TABLE,
    "tr": NodeKind.TABLE_ROW,
    "th": NodeKind.TABLE_HEADER,
    "td": NodeKind.TABLE_CELL,
    "caption": NodeKind.TABLE_CAPTION,
    "b": NodeKind.BOLD,
    "i": NodeKind.ITALIC,
}
_CELL_KINDS = (NodeKind.TABLE_HEADER, NodeKind.TABLE_CELL)


class WikitextParseError(ValueError):
    """El wikitext no se pudo decodificar o analizar."""


def _convert_code(code) -> List[Node]:
    if code is None:
        return []
    out: List[Node] = []
    for node in code.nodes:
        converted = _convert_node(node)
        if converted is not None:
            out.append(converted)
    return out


def _convert_attributes(tag: Tag) -> List[Node]:
    attrs = [
        Node(NodeKind.ATTRIBUTE, _convert_code(a.value), name=str(a.name).strip())
        for a in tag.attributes
    ]
    return [Node(NodeKind.ATTRIBUTES, attrs)] if attrs else []


def _group_implicit_rows(children: Iterable[Node]) -> List[Node]:
    """Agrupa celdas sueltas dentro de una tabla (sin `|-` previo) en una fila implícita."""
    grouped: List[Node] = []
    pending: Optional[Node] = None
    for child in children:
        if child.kind in _CELL_KINDS:
            if pending is None:
                pending = Node(NodeKind.TABLE_ROW)
                grouped.append(pending)
            pending.children.append(child)
            continue
        if child.kind is not NodeKind.TEXT:
            pending = None
        grouped.append(child)
    return grouped


def _caption_in_attributes(tag: Tag) -> bool:
    # `|+ style="x" | Leyenda`: el "+" queda pegado al primer atributo
    return bool(tag.attributes) and str(tag.attributes[0].name).lstrip().startswith("+")


def _is_caption_cell(tag: Tag) -> bool:
    # `|+ Leyenda` puede llegar como celda cuyo contenido empieza con "+"
    if tag.wiki_markup != "|":
        return False
    if _caption_in_attributes(tag):
        return True
    return tag.contents is not None and str(tag.contents).startswith("+")


def _convert_caption(tag: Tag) -> Node:
    attrs = _convert_attributes(tag)
    contents = _convert_code(tag.contents)
    if _caption_in_attributes(tag):
        first = attrs[0].children[0]
        first.name = first.name.lstrip().lstrip("+").strip()
        if not first.name:
            del attrs[0].children[0]
    else:
        text = next(c for c in contents if c.kind is NodeKind.TEXT)
        text.text = text.text[1:]
    return Node(NodeKind.TABLE_CAPTION, attrs + contents)


def _convert_tag(tag: Tag) -> Node:
    name = str(tag.tag).strip().lower()
    kind = _TAG_KINDS.get(name)
    if kind is None:
        return Node(NodeKind.OTHER, name=name)
    if kind is NodeKind.TABLE_CELL and _is_caption_cell(tag):
        return _convert_caption(tag)
    children = _convert_attributes(tag) + _convert_code(tag.contents)
    if kind is NodeKind.TABLE:
        children = _group_implicit_rows(children)
    return Node(kind, children)


def _convert_node(node) -> Optional[Node]:
    if isinstance(node, Text):
        return Node(NodeKind.TEXT, text=node.value)
    if isinstance(node, HTMLEntity):
        return Node(NodeKind.TEXT, text=node.normalize())
    if isinstance(node, Tag):
        return _convert_tag(node)
    if isinstance(node, Wikilink):
        title = None if node.text is None else _convert_code(node.text)
        return Node(NodeKind.INTERNAL_LINK, target=str(node.title).strip(), title=title)
    if isinstance(node, ExternalLink):
        protocol, _, path = str(node.url).strip().partition(":")
        title = _convert_code(node.title) if node.brackets and node.title else None
        return Node(NodeKind.EXTERNAL_LINK, protocol=protocol, path=path, title=title)
    return Node(NodeKind.OTHER)


def _build_page(code) -> Node:
    root = Node(NodeKind.PAGE)
    body = Node(NodeKind.BODY)
    root.children.append(body)
    for node in code.nodes:
        if isinstance(node, Heading):
            body = Node(NodeKind.BODY)
            root.children.append(
                Node(NodeKind.SECTION, [body], text=str(node.title).strip())
            )
            continue
        converted = _convert_node(node)
        if converted is not None:
            body.children.append(converted)
    return root


def parse_wikitext(source: Union[str, bytes]) -> Node:
    """Analiza wikitext (str o bytes UTF-8) y devuelve la raíz de la página."""
    if isinstance(source, bytes):
        try:
            source = source.decode("utf-8")
        except UnicodeDecodeError as e:
            raise WikitextParseError(f"El wikitext no es UTF-8 válido: {e}") from e
    try:
        code = mwparserfromhell.parse(source)
    except ParserError as e:
        raise WikitextParseError(f"No se pudo analizar el wikitext: {e}") from e
    root = _build_page(code)
    log.debug("Página analizada: %d bloques de nivel superior.", len(root.children))
    return root


def parse_wikitext_file(path: Union[str, Path]) -> Node:
    with open(path, "rb") as f:
        raw = f.read()
    return parse_wikitext(raw)
