"""Optional read-through cache in front of an orchestrator.

The engine itself keeps no state between calls. Callers that analyze the same
content repeatedly can wrap their orchestrator in ``AnalysisCache``; entries
are keyed by a SHA-256 fingerprint of the table content.
"""
from collections import OrderedDict
from typing import Optional
import copy
import hashlib
import json
import logging

from .models import AnalysisReport, Table
from .orchestrator import AnalysisOrchestrator

log = logging.getLogger(__name__)


def fingerprint(table: Table) -> str:
    h = hashlib.sha256()
    header = {
        'rows': table.row_count,
        'columns': [(c.name, c.type) for c in table.columns],
        'file_size': table.file_size,
    }
    h.update(json.dumps(header, default=str).encode('utf-8'))
    for row in table.rows:
        h.update(json.dumps(row, sort_keys=True, default=str).encode('utf-8'))
        h.update(b'\n')
    return h.hexdigest()


class AnalysisCache:
    def __init__(self, orchestrator: Optional[AnalysisOrchestrator] = None, max_entries: Optional[int] = None):
        self.orchestrator = orchestrator or AnalysisOrchestrator()
        self.max_entries = max_entries or self.orchestrator.cfg.cache_max_entries
        self._entries: "OrderedDict[str, AnalysisReport]" = OrderedDict()
        self.hits = 0
        self.misses = 0

    def __len__(self):
        return len(self._entries)

    def analyze(self, table: Table) -> AnalysisReport:
        key = fingerprint(table)
        cached = self._entries.get(key)
        if cached is not None:
            self._entries.move_to_end(key)
            self.hits += 1
            log.debug(f"Cache hit {key[:12]}")
            return copy.deepcopy(cached)

        self.misses += 1
        report = self.orchestrator.analyze(table)
        self._entries[key] = copy.deepcopy(report)
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)
        return report

    def run_complete_analysis(self, table: Table):
        return self.analyze(table).results

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0
