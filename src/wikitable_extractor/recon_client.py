# src/wikitable_extractor/recon_client.py
"""
Cliente HTTP para servicios de reconciliación con el protocolo de OpenRefine.

Se envía un formulario con el campo `queries` (JSON `{"q0": {...}, ...}`) y
se espera `{"q0": {"result": [{"id", "name", "score", "match", "type"}]}}`.
Cualquier fallo de red o respuesta mal formada se traduce en "sin
coincidencia" para todo el lote.
"""
from __future__ import annotations
import json
import logging
from typing import Any, Dict, List, Optional, Sequence

import requests

from .reconcile import ReconCandidate, ReconJob, ReconResult

log = logging.getLogger(__name__)

DEFAULT_SERVICE_URL = "https://tools.wmflabs.org/openrefine-wikidata/en/api"
WIKIDATA_IDENTIFIER_SPACE = "http://www.wikidata.org/entity/"
WIKIDATA_SCHEMA_SPACE = "http://www.wikidata.org/prop/direct/"
DEFAULT_TIMEOUT = 30


def _parse_candidate(raw: Dict[str, Any]) -> ReconCandidate:
    types = tuple(
        t.get("id", "") if isinstance(t, dict) else str(t)
        for t in raw.get("type") or []
    )
    return ReconCandidate(
        entity_id=str(raw["id"]),
        label=str(raw.get("name", "")),
        score=float(raw.get("score", 0.0)),
        types=types,
    )


class StandardReconClient:
    """Reconciliador estándar (Wikidata por defecto) sobre `requests`."""

    def __init__(
        self,
        service_url: str = DEFAULT_SERVICE_URL,
        *,
        identifier_space: str = WIKIDATA_IDENTIFIER_SPACE,
        schema_space: str = WIKIDATA_SCHEMA_SPACE,
        type_id: str = "",
        type_name: str = "entity",
        auto_match: bool = True,
        limit: int = 1,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.service_url = service_url
        self.identifier_space = identifier_space
        self.schema_space = schema_space
        self.type_id = type_id
        self.type_name = type_name
        self.auto_match = auto_match
        self.limit = limit
        self.timeout = timeout
        self.session = session or requests.Session()

    def recon_config(self) -> Dict[str, Any]:
        """Configuración de reconciliación que se adjunta a las columnas reconciladas."""
        return {
            "mode": "standard-service",
            "service": self.service_url,
            "identifierSpace": self.identifier_space,
            "schemaSpace": self.schema_space,
            "type": {"id": self.type_id, "name": self.type_name},
            "autoMatch": self.auto_match,
            "columnDetails": [],
            "limit": self.limit,
        }

    def _build_queries(self, jobs: Sequence[ReconJob]) -> Dict[str, Dict[str, Any]]:
        queries = {}
        for i, job in enumerate(jobs):
            query: Dict[str, Any] = {"query": job.query_url}
            if self.limit > 0:
                query["limit"] = self.limit
            if self.type_id:
                query["type"] = self.type_id
            queries[f"q{i}"] = query
        return queries

    def _to_result(self, payload: Optional[Dict[str, Any]]) -> Optional[ReconResult]:
        if not payload:
            return None
        raw = payload.get("result") or []
        candidates = [_parse_candidate(c) for c in raw]
        if not candidates:
            return None
        best = candidates[0]
        matched = self.auto_match and bool(raw[0].get("match"))
        return ReconResult(
            entity_id=best.entity_id,
            entity_label=best.label,
            match_score=best.score,
            candidates=candidates,
            matched=matched,
        )

    def batch_resolve(self, jobs: Sequence[ReconJob]) -> List[Optional[ReconResult]]:
        if not jobs:
            return []
        queries = self._build_queries(jobs)
        try:
            resp = self.session.post(
                self.service_url,
                data={"queries": json.dumps(queries)},
                timeout=self.timeout,
            )
            resp.raise_for_status()
            data = resp.json()
            return [self._to_result(data.get(f"q{i}")) for i in range(len(jobs))]
        except (requests.RequestException, KeyError, ValueError, TypeError, AttributeError) as e:
            log.warning("Servicio de reconciliación no disponible (%s): %s", self.service_url, e)
            return [None] * len(jobs)
