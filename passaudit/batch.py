"""
passaudit.batch

Batch analysis over the strength engine. Every item is evaluated on its own:
a bad item produces a per-item error, never a failed batch. Passwords are
masked (first 4 characters + '***') in everything this module returns.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from .evaluator import PasswordStrengthEngine, ScoreResult, Strength, default_engine

logger = logging.getLogger(__name__)

MAX_BATCH_SIZE = 1000


class BatchTooLarge(ValueError):
    pass


def mask_password(password: str, visible: int = 4) -> str:
    return password[:visible] + "***"


def parse_password_lines(text: str) -> List[str]:
    """One password per line; blank lines are skipped, the rest kept verbatim."""
    return [line for line in text.splitlines() if line.strip()]


@dataclass(frozen=True)
class BatchItem:
    index: int
    masked: str
    result: Optional[ScoreResult] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"index": self.index, "password": self.masked}
        if self.result is not None:
            out.update(self.result.to_dict())
        else:
            out["error"] = self.error
        return out


@dataclass(frozen=True)
class BatchReport:
    items: List[BatchItem]

    @property
    def results(self) -> List[ScoreResult]:
        return [i.result for i in self.items if i.result is not None]

    def summary(self) -> Dict[str, Any]:
        results = self.results
        counts = {s.key: 0 for s in Strength}
        for r in results:
            counts[r.strength.key] += 1
        n = len(results)
        return {
            "total": len(self.items),
            "analyzed": n,
            "failed": len(self.items) - n,
            "by_strength": counts,
            "average_score": round(sum(r.score for r in results) / n) if n else 0,
            "average_entropy": round(sum(r.entropy_bits for r in results) / n, 1) if n else 0.0,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {"summary": self.summary(), "results": [i.to_dict() for i in self.items]}


def analyze_batch(
    items: Sequence[Any],
    engine: Optional[PasswordStrengthEngine] = None,
    workers: Optional[int] = None,
    max_size: int = MAX_BATCH_SIZE,
) -> BatchReport:
    """
    Evaluate a batch. items[i] always maps to report.items[i].
    Raises BatchTooLarge before doing any work when len(items) > max_size.
    """
    if len(items) > max_size:
        raise BatchTooLarge(f"Maximum {max_size} passwords per batch (got {len(items)})")
    engine = engine or default_engine()

    valid = [(i, p) for i, p in enumerate(items) if isinstance(p, str)]
    results = engine.evaluate_batch([p for _, p in valid], workers=workers)
    by_index = {i: r for (i, _), r in zip(valid, results)}

    out: List[BatchItem] = []
    for i, p in enumerate(items):
        if i in by_index:
            out.append(BatchItem(index=i, masked=mask_password(p), result=by_index[i]))
        else:
            logger.warning("Batch item %d skipped: expected a string, got %s", i, type(p).__name__)
            out.append(BatchItem(index=i, masked="", error=f"expected a string, got {type(p).__name__}"))

    logger.debug("Analyzed batch of %d items (%d failed)", len(out), len(out) - len(valid))
    return BatchReport(items=out)
