import logging
import os
import time
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Set

import numpy as np
import pandas as pd

import config
from utils import clean_digits, digit_signature, load_json, save_json


@dataclass
class HistoryEntry:
    id: str
    label: str
    result: str
    digits: str
    date: str
    is_custom: bool = False

    @property
    def is_baseline(self) -> bool:
        return str(self.id).startswith(config.BASELINE_ID_PREFIX)

    @classmethod
    def from_dict(cls, d: Dict) -> "HistoryEntry":
        return cls(
            id=str(d.get("id", "")),
            label=str(d.get("label", "")),
            result=clean_digits(d.get("result", "")),
            digits=clean_digits(d.get("digits", "")),
            date=str(d.get("date", "")),
            is_custom=bool(d.get("isCustom", False)),
        )

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "label": self.label,
            "result": self.result,
            "digits": self.digits,
            "date": self.date,
            "isCustom": self.is_custom,
        }


def slot_index(label: str) -> int:
    return config.TIME_SLOTS.index(label) if label in config.TIME_SLOTS else -1


def _sort_key(e: HistoryEntry):
    return (e.date, slot_index(e.label))


class HistoryStore:
    """Custom draw entries kept in a JSON file, merged over the shipped baseline."""

    def __init__(self, path: Optional[str] = None, baseline: Iterable[Dict] = config.SYSTEM_BASELINE):
        self.path = path or os.path.join(config.STATE_DIR, config.DB_FILENAME)
        self.baseline = [HistoryEntry.from_dict(d) for d in baseline]
        self.entries: List[HistoryEntry] = []
        self.load()

    def load(self) -> List[HistoryEntry]:
        raw = load_json(self.path, default=[])
        if not isinstance(raw, list):
            logging.error(f"history file {self.path} does not hold a list, ignoring it")
            raw = []
        self.entries = [HistoryEntry.from_dict(d) for d in raw if isinstance(d, dict)]
        logging.info(f"history loaded: {len(self.entries)} custom entries from {self.path}")
        return self.entries

    def save(self):
        save_json(self.path, [e.to_dict() for e in self.entries])

    def add_entry(self, date: str, label: str, result: str, bbfs: Optional[str] = None) -> HistoryEntry:
        result = clean_digits(result)
        digits = clean_digits(bbfs)
        if not digits and len(result) >= 4:
            digits = digit_signature(result)
        if not date:
            raise ValueError("entry date is required")
        if not digits:
            raise ValueError("entry BBFS digits are required")
        if label not in config.TIME_SLOTS:
            raise ValueError(f"unknown time slot: {label!r}")
        entry = HistoryEntry(
            id=str(int(time.time() * 1000)),
            label=label,
            result=result,
            digits=digits,
            date=str(date),
            is_custom=True,
        )
        self.entries.insert(0, entry)
        self.save()
        logging.info(f"history entry added: {entry.date} {entry.label} {entry.result or '----'}")
        return entry

    def delete_entry(self, entry_id: str) -> bool:
        if str(entry_id).startswith(config.BASELINE_ID_PREFIX):
            raise ValueError("baseline entries cannot be deleted")
        before = len(self.entries)
        self.entries = [e for e in self.entries if e.id != entry_id]
        if len(self.entries) == before:
            return False
        self.save()
        logging.info(f"history entry deleted: {entry_id}")
        return True

    def wipe(self):
        if os.path.exists(self.path):
            os.remove(self.path)
        self.entries = []
        logging.info("custom history wiped, baseline kept")

    def combined_entries(self) -> List[HistoryEntry]:
        merged: Dict[str, HistoryEntry] = {}
        for item in self.entries + self.baseline:
            key = f"{item.date}-{item.label}"
            if key not in merged or not item.is_baseline:
                merged[key] = item
        return sorted(merged.values(), key=_sort_key, reverse=True)

    def search(self, term: str = "", limit: int = 100) -> List[HistoryEntry]:
        term = (term or "").strip()
        hits = [e for e in self.combined_entries()
                if term in e.date or term in e.digits or term in e.result]
        return hits[:limit]

    def history_signatures(self, since: str = config.HISTORY_THRESHOLD) -> Set[str]:
        """Signatures of every 2..n digit tail of results drawn on or after ``since``."""
        sigs: Set[str] = set()
        for e in self.entries + self.baseline:
            if e.date >= since and e.result:
                for n in range(2, len(e.result) + 1):
                    sigs.add(digit_signature(e.result[-n:]))
        return sigs

    def to_frame(self) -> pd.DataFrame:
        rows = [e.to_dict() for e in self.combined_entries()]
        return pd.DataFrame(rows, columns=["id", "label", "result", "digits", "date", "isCustom"])

    def archive_grid(self) -> pd.DataFrame:
        df = self.to_frame()
        if df.empty:
            return pd.DataFrame(columns=list(config.TIME_SLOTS))
        grid = df.pivot_table(index="date", columns="label", values="digits", aggfunc="first")
        grid = grid.reindex(columns=list(config.TIME_SLOTS)).fillna("")
        return grid.sort_index(ascending=False)

    def duplicate_tracking(self) -> Dict[str, int]:
        """Map 'date|slot' to the occurrence order of its digits when those digits repeat."""
        occurrences: Dict[str, List[HistoryEntry]] = {}
        for e in self.combined_entries():
            if e.digits:
                occurrences.setdefault(e.digits, []).append(e)
        out: Dict[str, int] = {}
        for group in occurrences.values():
            if len(group) > 1:
                for idx, e in enumerate(sorted(group, key=_sort_key), start=1):
                    out[f"{e.date}|{e.label}"] = idx
        return out

    def top_rank_status(self, rankings: Sequence = config.TOP_RANKINGS,
                        since: str = config.HISTORY_THRESHOLD) -> pd.DataFrame:
        recent = {e.digits for e in self.combined_entries() if e.date >= since and e.digits}
        rows = [{"rank": i, "digits": digits, "qty": qty, "is_out": digits in recent}
                for i, (digits, qty) in enumerate(rankings, start=1)]
        return pd.DataFrame(rows, columns=["rank", "digits", "qty", "is_out"])

    def position_matrix(self, field: str = "result", slots: Optional[Sequence[str]] = None,
                        limit: int = config.MATRIX_LIMIT) -> np.ndarray:
        """Per entry, mark each digit at the position of its first occurrence (from the left)."""
        matrix = np.zeros((config.MATRIX_POSITIONS, 10), dtype=int)
        slots = config.TIME_SLOTS if slots is None else slots
        entries = [e for e in self.combined_entries() if e.label in slots][:limit]
        for e in entries:
            value = getattr(e, field)
            for d in range(10):
                idx = value.find(str(d))
                if 0 <= idx < config.MATRIX_POSITIONS:
                    matrix[idx, d] += 1
        return matrix
