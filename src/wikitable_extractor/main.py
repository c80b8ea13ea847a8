from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .config import ImportOptions
from .exporters import frame_to_csv, recon_frame_to_csv
from .importer import ImportResult, import_wikitext
from .reconcile import Reconciler

log = logging.getLogger(__name__)


def _ensure_parent_dir(csv_path: str) -> None:
    Path(csv_path).parent.mkdir(parents=True, exist_ok=True)


def _recon_variant_path(csv_path: str) -> Path:
    path = Path(csv_path)
    suffix = ".csv"
    if path.suffix.lower() != suffix:
        return path.with_name(f"{path.name}.recon.csv")
    return path.with_name(f"{path.stem}.recon.csv")


def wikitext_to_csv(
    wikitext_path: str,
    csv_path: str,
    *,
    options: Optional[ImportOptions] = None,
    reconciler: Optional[Reconciler] = None,
) -> ImportResult:
    """
    Orquesta la importación: analiza el wikitext, reconstruye la tabla,
    reconcilia las celdas enlazadas y escribe el CSV.
    Si alguna columna quedó reconciliada escribe además `<nombre>.recon.csv`
    con los identificadores de entidad.
    """
    options = options or ImportOptions()
    log.info("Leyendo wikitext desde: %s", wikitext_path)
    with open(wikitext_path, "rb") as f:
        raw = f.read()

    result = import_wikitext(raw, options, reconciler)
    if result.frame.empty and not len(result.frame.columns):
        log.warning("No se encontró ninguna tabla. Se generará un CSV vacío.")

    _ensure_parent_dir(csv_path)
    frame_to_csv(result.frame, csv_path)
    log.info("CSV escrito en: %s (%d filas, %d columnas)", csv_path,
             len(result.frame), len(result.frame.columns))

    if result.column_recon:
        recon_csv = _recon_variant_path(csv_path)
        recon_frame_to_csv(result.recon_frame, str(recon_csv))
        log.info("CSV de reconciliación escrito en: %s (columnas: %s)", recon_csv,
                 ", ".join(result.column_recon))
    return result
