import logging
from functools import lru_cache
from typing import Dict, List, Optional, Sequence, Set, Tuple

import pandas as pd

from config import (CLASS_SINGLE, CLASS_TWIN, CLASS_TWIN_PLUS, COPY_LIMIT, DIMENSIONS,
                    EXPORT_DELIMITER, RESULT_CLASSES, TWIN_MAX_K)
from permutation_engine import (analyze, classify_result, generate_poltar, generate_single,
                                generate_twin, split_repeats)
from result_filters import FilterConfig, ResultFilter
from utils import chunked, clean_digits

ResultsByDim = Dict[str, Dict[str, List[str]]]


def dim_length(dim: str) -> int:
    return int(dim.rstrip("D"))


def empty_results() -> ResultsByDim:
    return {dim: {cls: [] for cls in RESULT_CLASSES} for dim in DIMENSIONS}


@lru_cache(maxsize=256)
def _generate_cached(digits: str, k: int, max_k: int) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
    ms = analyze(digits)
    single = generate_single(ms.distinct_digits, k)
    repeats = generate_twin(ms.distinct_digits, ms.repeated_digits, k, ms.counts, max_k=max_k)
    return tuple(single), tuple(repeats)


def generate_for_input(raw: str, k: int, max_k: int = TWIN_MAX_K) -> Tuple[List[str], List[str]]:
    """(single, repeated) numbers of length k for a seed, memoized on the cleaned digits."""
    single, repeats = _generate_cached(clean_digits(raw), k, max_k)
    return list(single), list(repeats)


def export_chunk(results: Sequence[str], start: int, amount: int = COPY_LIMIT,
                 delimiter: str = EXPORT_DELIMITER) -> Tuple[str, int]:
    if not results:
        return "", start
    start = max(0, min(start, len(results)))
    end = min(start + max(0, amount), len(results))
    return delimiter.join(results[start:end]), end


def export_all(results: Sequence[str], delimiter: str = EXPORT_DELIMITER) -> str:
    return delimiter.join(results)


def export_chunks(results: Sequence[str], amount: int = COPY_LIMIT,
                  delimiter: str = EXPORT_DELIMITER) -> List[str]:
    return [delimiter.join(chunk) for chunk in chunked(list(results), amount)]


class BBFSCalculator:
    def __init__(self, max_k: int = TWIN_MAX_K):
        self.max_k = max_k

    def generate_bbfs(self, raw: str) -> ResultsByDim:
        data = empty_results()
        digits = clean_digits(raw)
        if len(digits) < 2:
            return data
        for dim in DIMENSIONS:
            single, repeats = generate_for_input(digits, dim_length(dim), self.max_k)
            twin, twin_plus = split_repeats(repeats)
            data[dim][CLASS_SINGLE] = single
            data[dim][CLASS_TWIN] = twin
            data[dim][CLASS_TWIN_PLUS] = twin_plus
        logging.info(f"BBFS {digits}: " + ", ".join(
            f"{dim}={sum(len(v) for v in data[dim].values())}" for dim in DIMENSIONS))
        return data

    def generate_poltar(self, positions: Sequence[str]) -> ResultsByDim:
        data = empty_results()
        for dim in DIMENSIONS:
            for s in generate_poltar(positions, dim_length(dim)):
                data[dim][classify_result(s)].append(s)
        logging.info("POLTAR " + "/".join(clean_digits(p) or "-" for p in positions))
        return data

    def filter_results(self, results: ResultsByDim, cfg: Optional[FilterConfig] = None,
                       signatures: Optional[Set[str]] = None) -> ResultsByDim:
        flt = ResultFilter(cfg, signatures)
        return {dim: {cls: flt.apply(nums) for cls, nums in buckets.items()}
                for dim, buckets in results.items()}

    def result_list(self, filtered: ResultsByDim, selected_dims: Sequence[str] = DIMENSIONS) -> List[str]:
        combined: List[str] = []
        for dim in DIMENSIONS:
            if dim in selected_dims and dim in filtered:
                for cls in RESULT_CLASSES:
                    combined.extend(filtered[dim].get(cls, []))
        return combined

    def summary(self, filtered: ResultsByDim, selected_dims: Sequence[str] = DIMENSIONS) -> pd.DataFrame:
        rows = []
        for dim in DIMENSIONS:
            buckets = filtered.get(dim, {}) if dim in selected_dims else {}
            row = {"type": dim}
            for cls in RESULT_CLASSES:
                row[cls] = len(buckets.get(cls, []))
            row["total"] = sum(row[cls] for cls in RESULT_CLASSES)
            rows.append(row)
        return pd.DataFrame(rows, columns=["type", *RESULT_CLASSES, "total"])
