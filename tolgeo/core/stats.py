"""Counters collected during an intersection search."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class SearchStats:
    seeds_evaluated: int = 0
    seeds_screened: int = 0
    refine_converged: int = 0
    refine_not_converged: int = 0
    refine_degenerate: int = 0
    duplicates_removed: int = 0
    candidates: int = 0

    @property
    def refine_failed(self) -> int:
        return self.refine_not_converged + self.refine_degenerate

    def to_dict(self) -> Dict[str, Any]:
        return {
            'seeds_evaluated': self.seeds_evaluated,
            'seeds_screened': self.seeds_screened,
            'refine_converged': self.refine_converged,
            'refine_not_converged': self.refine_not_converged,
            'refine_degenerate': self.refine_degenerate,
            'refine_failed': self.refine_failed,
            'duplicates_removed': self.duplicates_removed,
            'candidates': self.candidates,
            'screen_rate': (self.seeds_screened / self.seeds_evaluated) if self.seeds_evaluated else 0.0,
            'converge_rate': (self.refine_converged / self.seeds_screened) if self.seeds_screened else 0.0,
        }


def format_stats(stats: SearchStats) -> str:
    """Return a one-line human readable summary."""
    d = stats.to_dict()
    return (f"seeds={d['seeds_evaluated']} screened={d['seeds_screened']} "
            f"converged={d['refine_converged']} failed={d['refine_failed']} "
            f"dups={d['duplicates_removed']} found={d['candidates']} "
            f"conv%={d['converge_rate'] * 100.0:.1f}")


__all__ = ['SearchStats', 'format_stats']
