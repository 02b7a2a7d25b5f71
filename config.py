# config.py
# BBFS calculator settings: dimensions, pricing tiers, history store

import os

DIMENSIONS = ("2D", "3D", "4D", "5D")

# Twin generation is skipped above this length (search space is n^k before pruning)
TWIN_MAX_K = 5

CLASS_SINGLE = "single"
CLASS_TWIN = "twin"
CLASS_TWIN_PLUS = "twin_plus"
RESULT_CLASSES = (CLASS_SINGLE, CLASS_TWIN, CLASS_TWIN_PLUS)

SIZE_SMALL = "small"
SIZE_MIX = "mix"
SIZE_LARGE = "large"
SMALL_DIGITS = frozenset("01234")
LARGE_DIGITS = frozenset("56789")

HISTORY_FILTERS = ("ALL", "IN DB", "FRESH")

EXPORT_DELIMITER = "*"
COPY_LIMIT = 25
COPY_LIMIT_OPTIONS = (10, 25, 50, 100)

# Pricing
PRICE_TIERS = ("full", "diskon", "super")
DEFAULT_PRICE = "0.1"
DISCOUNTS = {
    "2D": {"full": 1.00, "diskon": 0.67, "super": 0.34},
    "3D": {"full": 1.00, "diskon": 0.67, "super": 0.34},
    "4D": {"full": 1.00, "diskon": 0.67, "super": 0.34},
    "5D": {"full": 1.00, "diskon": 0.62, "super": 0.34},
}

# History store
STATE_DIR = os.environ.get("BBFS_STATE_DIR", ".bbfs_state")
DB_FILENAME = "bebiaks_db_v15.json"
TIME_SLOTS = ("JAM 01", "JAM 13", "JAM 15", "JAM 16", "JAM 19", "JAM 21", "JAM 22", "JAM 23")
HISTORY_THRESHOLD = "2026-02-01"  # signatures and rank status only count draws from here on
BASELINE_ID_PREFIX = "h"
MATRIX_POSITIONS = 10  # rows of the position matrix (first-occurrence index of a digit)
MATRIX_LIMIT = 100

# Logging
LOG_LEVEL = os.environ.get("BBFS_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(module)s - %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Seed draws shipped with the app (custom entries override them per date+slot)
SYSTEM_BASELINE = (
    {"id": "h1", "label": "JAM 01", "result": "52913", "digits": "12359", "date": "2026-02-01"},
    {"id": "h2", "label": "JAM 13", "result": "80264", "digits": "02468", "date": "2026-02-01"},
    {"id": "h3", "label": "JAM 16", "result": "37145", "digits": "13457", "date": "2026-02-01"},
    {"id": "h4", "label": "JAM 19", "result": "61928", "digits": "12689", "date": "2026-02-01"},
    {"id": "h5", "label": "JAM 22", "result": "04392", "digits": "02349", "date": "2026-02-01"},
    {"id": "h6", "label": "JAM 01", "result": "71259", "digits": "12579", "date": "2026-02-02"},
    {"id": "h7", "label": "JAM 13", "result": "93318", "digits": "13389", "date": "2026-02-02"},
    {"id": "h8", "label": "JAM 15", "result": "26066", "digits": "02666", "date": "2026-02-02"},
    {"id": "h9", "label": "JAM 21", "result": "48571", "digits": "14578", "date": "2026-02-02"},
    {"id": "h10", "label": "JAM 23", "result": "15290", "digits": "01259", "date": "2026-02-03"},
    {"id": "h11", "label": "JAM 13", "result": "63480", "digits": "03468", "date": "2026-02-03"},
    {"id": "h12", "label": "JAM 19", "result": "20647", "digits": "02467", "date": "2026-02-04"},
    {"id": "h13", "label": "JAM 01", "result": "18733", "digits": "13378", "date": "2026-01-31"},
)

# Reference table of the most frequent 4-digit BBFS sets (digits, quantity)
TOP_RANKINGS = (
    ("1259", 11), ("0269", 10), ("3458", 10), ("0234", 9),
    ("0238", 8), ("0278", 8), ("0568", 8), ("1128", 8),
    ("1236", 8), ("1289", 8), ("1456", 8), ("1569", 8),
    ("1579", 8), ("3689", 8), ("4679", 8), ("5689", 8),
    ("0129", 7), ("0135", 7), ("0147", 7), ("1235", 7),
    ("1347", 7), ("1357", 7), ("1378", 7), ("2347", 7),
    ("2579", 7), ("3557", 7), ("3678", 7), ("0134", 6),
    ("0149", 6), ("0158", 6), ("0159", 6), ("0178", 6),
    ("0189", 6), ("0239", 6), ("0359", 6), ("0379", 6),
    ("0459", 6), ("0469", 6), ("0566", 6), ("0579", 6),
    ("0678", 6), ("1267", 6), ("1349", 6), ("1379", 6),
    ("1688", 6), ("2356", 6), ("3468", 6), ("3569", 6),
    ("3679", 6), ("3789", 6), ("4579", 6), ("4589", 6),
    ("4789", 6), ("0125", 5), ("0236", 5), ("0245", 5),
    ("0256", 5), ("0258", 5), ("0345", 5), ("0349", 5),
    ("0368", 5), ("1178", 5), ("1226", 5), ("1238", 5),
    ("1246", 5), ("1256", 5), ("1345", 5), ("1348", 5),
    ("1368", 5), ("1369", 5), ("1689", 5), ("2279", 5),
    ("2299", 5), ("2379", 5), ("2457", 5), ("2468", 5),
    ("2889", 5), ("3448", 5), ("3556", 5), ("3899", 5),
    ("4568", 5), ("4667", 5), ("5568", 5), ("0027", 4),
    ("0078", 4), ("0224", 4), ("0248", 4), ("0458", 4),
    ("0468", 4), ("1346", 4), ("1377", 4), ("1457", 4),
    ("2338", 4), ("2349", 4), ("2699", 4), ("3345", 4),
    ("3457", 4), ("5788", 4),
)
