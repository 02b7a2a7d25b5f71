"""BBFS permutation engine.

Every generator here respects the digit supply of the seed input: if the
seed is "12366", '6' may appear at most twice in any generated number.
Degenerate requests (empty seed, k too large, no repeated digit for Twin)
return an empty list instead of raising.
"""
from collections import Counter
from dataclasses import dataclass
from itertools import product
from types import MappingProxyType
from typing import List, Mapping, Optional, Sequence, Tuple

from config import CLASS_SINGLE, CLASS_TWIN, CLASS_TWIN_PLUS, TWIN_MAX_K
from utils import clean_digits


@dataclass(frozen=True)
class DigitMultiset:
    distinct_digits: Tuple[str, ...] = ()
    repeated_digits: Tuple[str, ...] = ()
    # (digit, count) pairs in ascending digit order
    supply: Tuple[Tuple[str, int], ...] = ()

    @property
    def counts(self) -> Mapping[str, int]:
        return MappingProxyType(dict(self.supply))

    @property
    def size(self) -> int:
        return sum(c for _, c in self.supply)


def analyze(raw: str) -> DigitMultiset:
    counts = Counter(clean_digits(raw))
    distinct = tuple(sorted(counts))
    repeated = tuple(d for d in distinct if counts[d] > 1)
    supply = tuple((d, counts[d]) for d in distinct)
    return DigitMultiset(distinct_digits=distinct, repeated_digits=repeated, supply=supply)


def generate_single(distinct_digits: Sequence[str], k: int) -> List[str]:
    """All ordered arrangements of k distinct digits, in enumeration order."""
    pool = list(distinct_digits)
    if k <= 0 or k > len(pool):
        return []
    results: List[str] = []
    used = [False] * len(pool)

    def backtrack(cur: List[str]):
        if len(cur) == k:
            results.append("".join(cur))
            return
        for i, d in enumerate(pool):
            if used[i]:
                continue
            used[i] = True
            cur.append(d)
            backtrack(cur)
            cur.pop()
            used[i] = False

    backtrack([])
    return results


def generate_twin(distinct_digits: Sequence[str], repeated_digits: Sequence[str], k: int,
                  counts: Optional[Mapping[str, int]], max_k: int = TWIN_MAX_K) -> List[str]:
    """Numbers of length k with at least one repeated digit, each digit capped at its supply.

    Returns a sorted list. Lengths above ``max_k`` are not generated.
    """
    pool = list(distinct_digits)
    if k <= 1 or not repeated_digits or counts is None or not pool or k > max_k:
        return []
    results = set()
    in_use = {d: 0 for d in pool}

    def backtrack(cur: List[str]):
        if len(cur) == k:
            if any(c > 1 for c in Counter(cur).values()):
                results.add("".join(cur))
            return
        for d in pool:
            if in_use[d] < counts.get(d, 0):
                in_use[d] += 1
                cur.append(d)
                backtrack(cur)
                cur.pop()
                in_use[d] -= 1

    backtrack([])
    return sorted(results)


def classify_result(s: str) -> str:
    n = len(s)
    unique = len(set(s))
    if unique == n:
        return CLASS_SINGLE
    if unique == n - 1:
        return CLASS_TWIN
    return CLASS_TWIN_PLUS


def split_repeats(results: Sequence[str]) -> Tuple[List[str], List[str]]:
    """Split Twin output into (exactly one pair, heavier repetition)."""
    twin, twin_plus = [], []
    for r in results:
        cls = classify_result(r)
        if cls == CLASS_TWIN:
            twin.append(r)
        elif cls == CLASS_TWIN_PLUS:
            twin_plus.append(r)
    return twin, twin_plus


def generate_poltar(positions: Sequence[str], k: int) -> List[str]:
    """Cartesian product of the last k position digit sets, in position order."""
    cleaned = [clean_digits(p) for p in positions]
    if k <= 0 or k > len(cleaned):
        return []
    tail = cleaned[len(cleaned) - k:]
    if not all(tail):
        return []
    return ["".join(t) for t in product(*tail)]
