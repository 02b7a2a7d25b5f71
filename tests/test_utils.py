import logging

from utils import (chunked, clean_digits, clean_price_input, digit_signature, load_json,
                   parse_number, save_json, setup_logging)


def test_clean_digits():
    assert clean_digits("1a2 3-4") == "1234"
    assert clean_digits(None) == ""
    assert clean_digits(["1", 2, "x3"]) == "123"
    assert clean_digits("٣4") == "4"


def test_digit_signature():
    assert digit_signature("5291") == "1259"
    assert digit_signature("") == ""


def test_parse_number_is_lenient():
    assert parse_number("0.25") == 0.25
    assert parse_number(3) == 3.0
    assert parse_number("") == 0.0
    assert parse_number("abc", default=1.0) == 1.0
    assert parse_number(None) == 0.0


def test_clean_price_input():
    assert clean_price_input("Rp 1.500,-") == "1.500"
    assert clean_price_input(None) == ""


def test_chunked():
    assert list(chunked(["a", "b", "c"], 2)) == [["a", "b"], ["c"]]
    assert list(chunked([], 3)) == []


def test_json_roundtrip_and_bad_file(tmp_path):
    path = tmp_path / "state" / "x.json"
    save_json(str(path), [{"a": 1}])
    assert load_json(str(path)) == [{"a": 1}]
    path.write_text("oops", encoding="utf-8")
    assert load_json(str(path), default=[]) == []
    assert load_json(str(tmp_path / "missing.json"), default={}) == {}


def test_setup_logging_sets_level():
    setup_logging("debug")
    assert logging.getLogger().level == logging.DEBUG
    setup_logging("warning")
    assert logging.getLogger().level == logging.WARNING
