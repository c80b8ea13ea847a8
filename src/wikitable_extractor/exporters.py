# src/wikitable_extractor/exporters.py
from __future__ import annotations
from typing import Any, List
import csv

import pandas as pd


def _cell_text(value: Any) -> Any:
    # celdas en blanco (None/NaN) → vacío
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    return value


def rows_to_csv(rows: List[List[Any]], header: List[str], csv_path: str) -> None:
    with open(csv_path, "w", encoding="utf-8-sig", newline="") as f:
        w = csv.writer(f)
        if header:
            w.writerow(header)
        w.writerows([[_cell_text(v) for v in r] for r in rows])


def frame_to_csv(frame: pd.DataFrame, csv_path: str) -> None:
    rows_to_csv(frame.values.tolist(), [str(c) for c in frame.columns], csv_path)


def recon_frame_to_csv(recon_frame: pd.DataFrame, csv_path: str) -> None:
    """
    Igual que frame_to_csv pero con el identificador de entidad de cada celda
    reconciliada en lugar del texto.
    """
    ids = [[getattr(r, "entity_id", None) for r in row] for row in recon_frame.values.tolist()]
    rows_to_csv(ids, [str(c) for c in recon_frame.columns], csv_path)
