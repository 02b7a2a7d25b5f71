from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Set

import pandas as pd

from config import (CLASS_SINGLE, CLASS_TWIN, CLASS_TWIN_PLUS, HISTORY_FILTERS, LARGE_DIGITS,
                    SIZE_LARGE, SIZE_MIX, SIZE_SMALL, SMALL_DIGITS)
from permutation_engine import classify_result
from utils import digit_signature


@dataclass
class FilterConfig:
    show_single: bool = True
    show_twin: bool = True
    show_twin_plus: bool = True
    show_small: bool = True
    show_mix: bool = True
    show_large: bool = True
    history_filter: str = "ALL"

    def class_enabled(self, cls: str) -> bool:
        return {
            CLASS_SINGLE: self.show_single,
            CLASS_TWIN: self.show_twin,
            CLASS_TWIN_PLUS: self.show_twin_plus,
        }.get(cls, False)

    def size_enabled(self, size: str) -> bool:
        return {
            SIZE_SMALL: self.show_small,
            SIZE_MIX: self.show_mix,
            SIZE_LARGE: self.show_large,
        }.get(size, False)


def size_bucket(s: str) -> str:
    digits = set(s)
    if digits <= SMALL_DIGITS:
        return SIZE_SMALL
    if digits <= LARGE_DIGITS:
        return SIZE_LARGE
    return SIZE_MIX


class ResultFilter:
    def __init__(self, cfg: Optional[FilterConfig] = None, signatures: Optional[Set[str]] = None):
        self.cfg = cfg or FilterConfig()
        self.signatures = signatures or set()
        if self.cfg.history_filter not in HISTORY_FILTERS:
            raise ValueError(f"unknown history filter: {self.cfg.history_filter!r}")

    def passes(self, s: str) -> bool:
        if not self.cfg.class_enabled(classify_result(s)):
            return False
        if not self.cfg.size_enabled(size_bucket(s)):
            return False
        mode = self.cfg.history_filter
        if mode == "IN DB":
            return digit_signature(s) in self.signatures
        if mode == "FRESH":
            return digit_signature(s) not in self.signatures
        return True

    def apply(self, items: Iterable[str]) -> List[str]:
        return [s for s in items if self.passes(s)]


def apply_filter(items: Iterable[str], cfg: FilterConfig, signatures: Optional[Set[str]] = None) -> List[str]:
    return ResultFilter(cfg, signatures).apply(items)


def results_frame(results_by_dim: Dict[str, Dict[str, List[str]]],
                  signatures: Optional[Set[str]] = None) -> pd.DataFrame:
    """One row per generated number, tagged with dimension, class, size bucket and history hit."""
    signatures = signatures or set()
    rows = []
    for dim, buckets in results_by_dim.items():
        for cls, numbers in buckets.items():
            for s in numbers:
                sig = digit_signature(s)
                rows.append({
                    "number": s,
                    "type": dim,
                    "class": cls,
                    "size": size_bucket(s),
                    "signature": sig,
                    "in_db": sig in signatures,
                })
    return pd.DataFrame(rows, columns=["number", "type", "class", "size", "signature", "in_db"])
