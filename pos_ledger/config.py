# pos_ledger/config.py

import os
import logging
import logging.config

# --- Database Configuration ---
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))  # pos_ledger/ -> project root
DATA_DIR = os.path.join(BASE_DIR, "data")
DB_NAME = "pos_ledger.db"
DATABASE_PATH = os.environ.get("POS_LEDGER_DB_PATH", os.path.join(DATA_DIR, DB_NAME))

# --- Logging Configuration ---
LOGS_DIR = os.environ.get("POS_LEDGER_LOG_DIR", os.path.join(BASE_DIR, "logs"))
LOG_FILE_NAME = "pos_ledger.log"
LOG_FILE_PATH = os.path.join(LOGS_DIR, LOG_FILE_NAME)

LOG_LEVEL = getattr(logging, os.environ.get("POS_LEDGER_LOG_LEVEL", "INFO").upper(), logging.INFO)
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(module)s.%(funcName)s:%(lineno)d - %(message)s'

LOGGING_CONFIG = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'standard': {
            'format': LOG_FORMAT,
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'standard',
            'level': LOG_LEVEL,
        },
        'file': {
            'class': 'logging.handlers.RotatingFileHandler',
            'formatter': 'standard',
            'filename': LOG_FILE_PATH,
            'maxBytes': 1024*1024*5,  # 5 MB
            'backupCount': 5,
            'level': logging.INFO,
            'encoding': 'utf-8',
        },
    },
    'root': {
        'handlers': ['console', 'file'],
        'level': LOG_LEVEL,
    },
}

# --- Business Defaults (callers may override per call) ---
LEAVE_BONUS_AMOUNT = 20000.0
DEFAULT_CURRENCY = "MMK"
PAYROLL_CATEGORY_NAME = "Payroll"
LOW_STOCK_THRESHOLD = 10
TRAILING_DAYS = 30
TRAILING_MONTHS = 12
FORECAST_LOOKBACK_MONTHS = 3
TOP_N_ITEMS = 5
MONTH_LABEL_CALENDAR = os.environ.get("POS_LEDGER_MONTH_CALENDAR", "gregorian")  # or "jalali"


def ensure_directories(*paths: str) -> None:
    for path in paths:
        if path and not os.path.exists(path):
            os.makedirs(path)


def configure_logging(to_file: bool = True) -> None:
    """Applies LOGGING_CONFIG. Pass to_file=False to log to the console only."""
    config = dict(LOGGING_CONFIG)
    if to_file:
        ensure_directories(LOGS_DIR)
    else:
        config['handlers'] = {'console': LOGGING_CONFIG['handlers']['console']}
        config['root'] = {'handlers': ['console'], 'level': LOG_LEVEL}
    logging.config.dictConfig(config)
