"""Attribute usage coverage: where each attribute was declared and how often it is read."""

from __future__ import annotations

import threading
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, PrivateAttr

from reservoir.core.types import CoverageDict


class CoverageRecord(BaseModel):
    model: str
    attribute: str
    file: Optional[str] = None
    line: Optional[int] = None
    hits: int = 0

    def to_dict(self) -> CoverageDict:
        return CoverageDict(
            model=self.model,
            attribute=self.attribute,
            file=self.file,
            line=self.line,
            hits=self.hits,
        )


class CoverageTracker(BaseModel):
    """Counters keyed by (model type key, attribute name).

    All mutation happens under one lock so concurrent reads from many
    instances never lose an increment.
    """

    records: Dict[Tuple[str, str], CoverageRecord] = Field(default_factory=dict)

    _lock: threading.Lock = PrivateAttr(default_factory=threading.Lock)

    def register(self, model: str, attribute: str, file: Optional[str], line: Optional[int]) -> CoverageRecord:
        record = CoverageRecord(model=model, attribute=attribute, file=file, line=line)
        with self._lock:
            self.records[(model, attribute)] = record
        return record

    def hit(self, model: str, attribute: str) -> None:
        with self._lock:
            record = self.records.get((model, attribute))
            if record is not None:
                record.hits += 1

    def record(self, model: str, attribute: str) -> CoverageRecord:
        key = (model, attribute)
        if key not in self.records:
            available = ", ".join(sorted(a for (m, a) in self.records if m == model))
            raise KeyError(f"No coverage record for {model}.{attribute}. Available: {available}")
        return self.records[key]

    def hits(self, model: str, attribute: str) -> int:
        return self.record(model, attribute).hits

    def reset(self, model: str, attribute: Optional[str] = None) -> None:
        """Zero the hit counters for one attribute, or for every attribute of ``model``."""
        with self._lock:
            for (m, a), record in self.records.items():
                if m == model and (attribute is None or a == attribute):
                    record.hits = 0

    def forget(self, model: str) -> None:
        with self._lock:
            for key in [k for k in self.records if k[0] == model]:
                del self.records[key]

    def report(self, model: str) -> List[CoverageRecord]:
        with self._lock:
            return [r.model_copy() for (m, _a), r in self.records.items() if m == model]

    def unused(self, model: str) -> List[str]:
        return [r.attribute for r in self.report(model) if r.hits == 0]
