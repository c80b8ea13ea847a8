# src/wikitable_extractor/importer.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

import pandas as pd

from .config import ImportOptions
from .parser import parse_wikitext
from .reader import Cell, WikiTableDataReader
from .reconcile import Reconciler, reconcile_grid
from .recon_client import StandardReconClient
from .spatial import Grid
from .walker import extract_table

log = logging.getLogger(__name__)


@dataclass
class ReconStats:
    non_blanks: int
    new_topics: int
    matched_topics: int


@dataclass
class ColumnRecon:
    config: Dict[str, Any]
    stats: ReconStats


@dataclass
class ImportResult:
    frame: pd.DataFrame
    recon_frame: pd.DataFrame
    grid: Grid
    project_name: Optional[str] = None
    column_recon: Dict[str, ColumnRecon] = field(default_factory=dict)


def _unique_column_names(labels: List[Optional[str]]) -> List[str]:
    names: List[str] = []
    seen: Dict[str, int] = {}
    for i, label in enumerate(labels):
        base = (label or "").strip() or f"Column {i + 1}"
        count = seen.get(base, 0) + 1
        seen[base] = count
        names.append(base if count == 1 else f"{base} {count}")
    return names


def read_table(
    reader: WikiTableDataReader,
    header_lines: int = 1,
    limit: int = -1,
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """Consume el lector y arma dos DataFrames alineados: valores y reconciliaciones.

    Las primeras `header_lines` filas forman los nombres de columna. Las filas
    más cortas se completan con celdas vacías; si alguna es más larga se
    agregan columnas "Column N".
    """
    header_rows: List[List[Cell]] = []
    body: List[List[Cell]] = []
    for cells in reader:
        if len(header_rows) < header_lines:
            header_rows.append(cells)
            continue
        if 0 <= limit <= len(body):
            break
        body.append(cells)

    width = max([len(r) for r in header_rows + body] or [0])
    labels: List[Optional[str]] = [None] * width
    for hrow in header_rows:
        for i, c in enumerate(hrow):
            if c.value:
                labels[i] = c.value if labels[i] is None else f"{labels[i]} {c.value}"
    columns = _unique_column_names(labels)

    values = [[c.value for c in r] + [None] * (width - len(r)) for r in body]
    recons = [[c.recon for c in r] + [None] * (width - len(r)) for r in body]
    frame = pd.DataFrame(values, columns=columns, dtype=object)
    recon_frame = pd.DataFrame(recons, columns=columns, dtype=object)
    return frame, recon_frame


def _recon_stats(recon_frame: pd.DataFrame, column: str) -> ReconStats:
    series = recon_frame[column]
    present = series.dropna()
    matched = int(sum(1 for r in present if r.matched))
    return ReconStats(
        non_blanks=int(present.shape[0]),
        new_topics=0,
        matched_topics=matched,
    )


def import_grid(
    grid: Grid,
    options: ImportOptions,
    reconciler: Optional[Reconciler] = None,
    recon_config: Optional[Dict[str, Any]] = None,
) -> ImportResult:
    """Reconcilia (si corresponde) y carga una rejilla ya extraída."""
    if options.reconcile_enabled:
        if reconciler is None:
            client = StandardReconClient(options.recon_service_url)
            reconciler = client
            recon_config = recon_config or client.recon_config()
        elif recon_config is None:
            recon_config = StandardReconClient(options.recon_service_url).recon_config()
        reconcile_grid(grid, reconciler, options.wiki_base_url, options.batch_size)

    reader = WikiTableDataReader(grid)
    frame, recon_frame = read_table(reader, header_lines=options.header_lines, limit=options.limit)

    result = ImportResult(frame=frame, recon_frame=recon_frame, grid=grid)
    if grid.caption:
        result.project_name = grid.caption
        log.info("Título sugerido a partir de la leyenda: %s", grid.caption)

    for i, done in enumerate(grid.reconciled_columns):
        if done and i < len(frame.columns):
            name = frame.columns[i]
            result.column_recon[name] = ColumnRecon(
                config=dict(recon_config or {}),
                stats=_recon_stats(recon_frame, name),
            )
    return result


def import_wikitext(
    source: Union[str, bytes],
    options: Optional[ImportOptions] = None,
    reconciler: Optional[Reconciler] = None,
    recon_config: Optional[Dict[str, Any]] = None,
) -> ImportResult:
    """Analiza wikitext, extrae su tabla y la importa como DataFrame.

    Los errores de análisis (`WikitextParseError`) se propagan al llamador.
    """
    options = options or ImportOptions()
    root = parse_wikitext(source)
    grid = extract_table(root, blank_spanning_cells=options.blank_spanning_cells)
    return import_grid(grid, options, reconciler, recon_config)
