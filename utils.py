from typing import Iterable, List, Optional, Union
import json
import logging
import os
import re

import config

_NON_DIGIT = re.compile(r"[^0-9]")
_NON_PRICE = re.compile(r"[^0-9.]")


def setup_logging(level: Optional[str] = None):
    """Configure root logging once per process (force=True replaces earlier handlers)."""
    logging.basicConfig(
        level=(level or config.LOG_LEVEL).upper(),
        format=config.LOG_FORMAT,
        datefmt=config.LOG_DATEFMT,
        force=True,
    )
    logging.debug("logging configured")


def clean_digits(x) -> str:
    if x is None:
        return ""
    if isinstance(x, (list, tuple)):
        return "".join(clean_digits(v) for v in x)
    return _NON_DIGIT.sub("", str(x))


def digit_signature(s: str) -> str:
    """Order-insensitive key of a digit string: '5291' -> '1259'."""
    return "".join(sorted(clean_digits(s)))


def parse_number(value: Union[str, int, float, None], default: float = 0.0) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def clean_price_input(value: str) -> str:
    return _NON_PRICE.sub("", str(value or ""))


def chunked(items: List[str], size: int) -> Iterable[List[str]]:
    size = max(1, int(size))
    for i in range(0, len(items), size):
        yield items[i:i + size]


def ensure_state_dir(path: str):
    os.makedirs(path, exist_ok=True)


def load_json(path: str, default=None):
    if not os.path.exists(path):
        return default
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        logging.error(f"failed to read {path}: {e}")
        return default


def save_json(path: str, data):
    directory = os.path.dirname(path)
    if directory:
        ensure_state_dir(directory)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False)
    logging.debug(f"saved {path}")
