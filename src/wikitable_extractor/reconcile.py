# src/wikitable_extractor/reconcile.py
"""
Reconciliación por lotes de las celdas enlazadas de una rejilla.

El servicio externo se inyecta como un `Reconciler`: cualquier objeto con
`batch_resolve(jobs)` que devuelva una lista del mismo largo y orden que
`jobs`, con `None` donde no hubo coincidencia.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence

import numpy as np

from .spatial import Grid, LinkedCell

log = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 50
DISABLED_URL = "null"


@dataclass(frozen=True)
class ReconJob:
    query_url: str


@dataclass(frozen=True)
class ReconCandidate:
    entity_id: str
    label: str
    score: float
    types: tuple = ()


@dataclass
class ReconResult:
    entity_id: str
    entity_label: str
    match_score: float
    candidates: List[ReconCandidate] = field(default_factory=list)
    matched: bool = False


@dataclass
class ReconSummary:
    batches: int = 0
    queried: int = 0
    resolved: int = 0
    failed_batches: int = 0


class Reconciler(Protocol):
    def batch_resolve(self, jobs: Sequence[ReconJob]) -> List[Optional[ReconResult]]:
        ...


def make_batches(cells: Sequence[LinkedCell], batch_size: int) -> List[List[LinkedCell]]:
    """Parte las celdas en lotes consecutivos de tamaño `batch_size` (el último puede ser menor)."""
    if batch_size < 1:
        raise ValueError(f"batch_size debe ser >= 1, se recibió {batch_size}")
    return [list(cells[i:i + batch_size]) for i in range(0, len(cells), batch_size)]


def _resolve_batch(reconciler: Reconciler, jobs: List[ReconJob]) -> Optional[List[Optional[ReconResult]]]:
    # None solo cuando la llamada lanzó una excepción
    try:
        results = reconciler.batch_resolve(jobs)
    except Exception as e:
        log.warning("Falló un lote de reconciliación (%d consultas): %s", len(jobs), e)
        return None
    return list(results or [])


def reconcile_grid(
    grid: Grid,
    reconciler: Reconciler,
    wiki_base_url: Optional[str],
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> ReconSummary:
    """Reconcilia las celdas enlazadas de `grid` y escribe los resultados en ella.

    Los lotes se envían en orden de descubrimiento, uno tras otro. Un lote que
    falla o devuelve menos resultados deja esas celdas sin reconciliar.
    """
    summary = ReconSummary()
    if wiki_base_url is None or wiki_base_url == DISABLED_URL:
        log.info("Reconciliación desactivada.")
        return summary

    grid.recons = [[None] * len(r) for r in grid.rows]
    reconciled = np.zeros(grid.width, dtype=bool)

    batches = make_batches(grid.linked_cells, batch_size)
    log.info("Reconciliando %d celdas enlazadas en %d lotes.", len(grid.linked_cells), len(batches))
    for bi, batch in enumerate(batches, start=1):
        jobs = [ReconJob(c.to_url(wiki_base_url)) for c in batch]
        results = _resolve_batch(reconciler, jobs)
        summary.batches += 1
        summary.queried += len(jobs)
        if results is None:
            summary.failed_batches += 1
            results = []
        for cell, recon in zip(batch, results):
            if recon is None:
                continue
            grid.recons[cell.row][cell.col] = recon
            reconciled[cell.col] = True
            summary.resolved += 1
        log.debug("Lote %d/%d: %d consultas, %d resultados.", bi, len(batches), len(jobs),
                  sum(r is not None for r in results))

    grid.reconciled_columns = reconciled.tolist()
    log.info("Reconciliación terminada: %d de %d celdas resueltas.", summary.resolved, summary.queried)
    return summary
