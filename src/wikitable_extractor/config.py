# src/wikitable_extractor/config.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .reconcile import DEFAULT_BATCH_SIZE, DISABLED_URL
from .recon_client import DEFAULT_SERVICE_URL

DEFAULT_WIKI_URL = "https://en.wikipedia.org/wiki/"
HEADER_LINES = 1


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


@dataclass
class ImportOptions:
    """Opciones reconocidas por el importador de tablas wikitext.

    `wiki_base_url` en `None` o con el literal "null" desactiva la
    reconciliación. `header_lines` siempre vale 1.
    """
    blank_spanning_cells: bool = True
    wiki_base_url: Optional[str] = DEFAULT_WIKI_URL
    recon_service_url: str = DEFAULT_SERVICE_URL
    batch_size: int = DEFAULT_BATCH_SIZE
    limit: int = -1
    guess_cell_value_types: bool = False
    header_lines: int = HEADER_LINES

    def __post_init__(self) -> None:
        self.header_lines = HEADER_LINES

    @property
    def reconcile_enabled(self) -> bool:
        return self.wiki_base_url is not None and self.wiki_base_url != DISABLED_URL

    @classmethod
    def from_dict(cls, options: Mapping[str, Any]) -> "ImportOptions":
        """Construye las opciones a partir de las claves camelCase del importador."""
        opts = cls()
        if "blankSpanningCells" in options:
            opts.blank_spanning_cells = _as_bool(options["blankSpanningCells"])
        # sin URL de wiki no se reconcilia
        opts.wiki_base_url = None
        for key in ("wikiUrl", "wikiBaseUrl"):
            if key in options:
                opts.wiki_base_url = options[key]
        for key in ("reconService", "reconciliationServiceUrl"):
            if options.get(key):
                opts.recon_service_url = str(options[key])
        if "batchSize" in options:
            opts.batch_size = int(options["batchSize"])
        if "limit" in options:
            opts.limit = int(options["limit"])
        if "guessCellValueTypes" in options:
            opts.guess_cell_value_types = _as_bool(options["guessCellValueTypes"])
        return opts

    def to_dict(self) -> Dict[str, Any]:
        return {
            "blankSpanningCells": self.blank_spanning_cells,
            "wikiUrl": self.wiki_base_url,
            "reconService": self.recon_service_url,
            "batchSize": self.batch_size,
            "limit": self.limit,
            "guessCellValueTypes": self.guess_cell_value_types,
            "headerLines": self.header_lines,
        }


def default_options() -> Dict[str, Any]:
    """Valores iniciales que se muestran al configurar la importación."""
    return ImportOptions().to_dict()
