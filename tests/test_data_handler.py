import json

import pytest

from data_handler import HistoryStore

BASELINE = (
    {"id": "h1", "label": "JAM 01", "result": "52913", "digits": "12359", "date": "2026-02-01"},
    {"id": "h2", "label": "JAM 13", "result": "80264", "digits": "02468", "date": "2026-02-01"},
    {"id": "h3", "label": "JAM 01", "result": "18733", "digits": "13378", "date": "2026-01-31"},
)


@pytest.fixture
def store(tmp_path):
    return HistoryStore(path=str(tmp_path / "db.json"), baseline=BASELINE)


def test_missing_file_loads_empty(store):
    assert store.entries == []
    assert len(store.combined_entries()) == 3


def test_corrupt_file_loads_empty(tmp_path):
    path = tmp_path / "db.json"
    path.write_text("{not json", encoding="utf-8")
    assert HistoryStore(path=str(path), baseline=BASELINE).entries == []
    path.write_text(json.dumps({"a": 1}), encoding="utf-8")
    assert HistoryStore(path=str(path), baseline=BASELINE).entries == []


def test_add_entry_persists_and_derives_bbfs(store):
    entry = store.add_entry("2026-02-02", "JAM 16", "4-7-1-2")
    assert entry.result == "4712"
    assert entry.digits == "1247"
    assert entry.is_custom
    reloaded = HistoryStore(path=store.path, baseline=BASELINE)
    assert [e.to_dict() for e in reloaded.entries] == [entry.to_dict()]


def test_add_entry_validation(store):
    with pytest.raises(ValueError):
        store.add_entry("2026-02-02", "JAM 16", "12")
    with pytest.raises(ValueError):
        store.add_entry("", "JAM 16", "1234")
    with pytest.raises(ValueError):
        store.add_entry("2026-02-02", "JAM 99", "1234")


def test_custom_entry_overrides_baseline_slot(store):
    store.add_entry("2026-02-01", "JAM 01", "99999")
    combined = store.combined_entries()
    assert len(combined) == 3
    first = [e for e in combined if e.date == "2026-02-01" and e.label == "JAM 01"][0]
    assert first.result == "99999"


def test_combined_sorted_newest_first(store):
    combined = store.combined_entries()
    assert [(e.date, e.label) for e in combined] == [
        ("2026-02-01", "JAM 13"), ("2026-02-01", "JAM 01"), ("2026-01-31", "JAM 01"),
    ]


def test_delete_and_wipe(store):
    entry = store.add_entry("2026-02-03", "JAM 19", "1234")
    with pytest.raises(ValueError):
        store.delete_entry("h1")
    assert store.delete_entry("nope") is False
    assert store.delete_entry(entry.id) is True
    assert store.entries == []
    store.add_entry("2026-02-03", "JAM 19", "1234")
    store.wipe()
    assert store.entries == []
    assert len(store.combined_entries()) == 3


def test_search(store):
    assert [e.id for e in store.search("0264")] == ["h2"]
    assert len(store.search("2026-02")) == 2
    assert len(store.search("2026", limit=1)) == 1


def test_history_signatures_respect_threshold(store):
    sigs = store.history_signatures(since="2026-02-01")
    assert "13" in sigs          # tail "13" of 52913
    assert "1239" in sigs        # tail "2913"
    assert "12359" in sigs
    assert "33" not in sigs      # 18733 is before the threshold
    assert "37" not in store.history_signatures(since="2026-02-01")
    assert "33" in store.history_signatures(since="2026-01-01")


def test_archive_grid(store):
    grid = store.archive_grid()
    assert list(grid.index) == ["2026-02-01", "2026-01-31"]
    assert grid.loc["2026-02-01", "JAM 01"] == "12359"
    assert grid.loc["2026-01-31", "JAM 13"] == ""


def test_duplicate_tracking(tmp_path):
    baseline = BASELINE + ({"id": "h4", "label": "JAM 22", "result": "35921", "digits": "12359",
                            "date": "2026-02-03"},)
    store = HistoryStore(path=str(tmp_path / "db.json"), baseline=baseline)
    assert store.duplicate_tracking() == {"2026-02-01|JAM 01": 1, "2026-02-03|JAM 22": 2}


def test_top_rank_status(store):
    status = store.top_rank_status(rankings=(("12359", 3), ("13378", 2), ("0000", 1)), since="2026-02-01")
    assert list(status["is_out"]) == [True, False, False]
    assert list(status["rank"]) == [1, 2, 3]


def test_position_matrix_marks_first_occurrence(store):
    matrix = store.position_matrix()
    assert matrix.shape == (10, 10)
    assert matrix.sum() == 14          # the second '3' of 18733 is not counted
    assert matrix[0, 5] == 1 and matrix[0, 8] == 1 and matrix[0, 1] == 1
    assert matrix[3, 3] == 1           # 18733
    assert matrix[4, 3] == 1           # 52913
    only_13 = store.position_matrix(slots=["JAM 13"])
    assert only_13.sum() == 5


def test_position_matrix_reads_long_digit_sets_from_the_left(store):
    store.add_entry("2026-02-05", "JAM 23", "", bbfs="0123456789")
    matrix = store.position_matrix(field="digits", slots=["JAM 23"])
    assert matrix.sum() == 10
    assert all(matrix[d, d] == 1 for d in range(10))
