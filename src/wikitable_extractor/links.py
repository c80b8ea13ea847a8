# src/wikitable_extractor/links.py
from __future__ import annotations
from typing import List, Optional


class LinkCollector:
    """Acumula los destinos de enlaces internos encontrados en una celda.

    Una celda solo se considera enlazada si contiene exactamente un enlace;
    con cero o varios enlaces no se reconcilia. Cada celda usa su propio
    colector.
    """

    def __init__(self) -> None:
        self.targets: List[str] = []

    def add(self, target: str) -> None:
        self.targets.append(target)

    def unique(self) -> Optional[str]:
        if len(self.targets) == 1:
            return self.targets[0]
        return None
