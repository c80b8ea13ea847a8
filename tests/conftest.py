"""Shared test configuration and fixtures."""

# pylint: disable=missing-class-docstring,missing-function-docstring

from typing import List, Optional, Sequence

import pytest

from wikitable_extractor.reconcile import ReconJob, ReconResult


class FakeReconciler:
    """Resolves every query URL to an entity derived from the URL; records each batch."""

    def __init__(self, unknown: Sequence[str] = (), fail_on_call: Optional[int] = None):
        self.calls: List[List[str]] = []
        self.unknown = set(unknown)
        self.fail_on_call = fail_on_call

    def batch_resolve(self, jobs: Sequence[ReconJob]) -> List[Optional[ReconResult]]:
        self.calls.append([j.query_url for j in jobs])
        if self.fail_on_call is not None and len(self.calls) == self.fail_on_call:
            raise ConnectionError("service down")
        results: List[Optional[ReconResult]] = []
        for job in jobs:
            name = job.query_url.rsplit("/", 1)[-1]
            if name in self.unknown:
                results.append(None)
            else:
                results.append(ReconResult(f"Q-{name}", name, 100.0, matched=True))
        return results


@pytest.fixture
def reconciler():
    return FakeReconciler()
