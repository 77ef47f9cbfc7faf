import os
import logging

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Hard cap on pages read per extraction call
MAX_PAGES = int(os.getenv("MAX_PAGES", "200"))

DEFAULT_BANK_TEMPLATE = os.getenv("DEFAULT_BANK_TEMPLATE", "auto-detect")
DEFAULT_PAGE_RANGE = os.getenv("DEFAULT_PAGE_RANGE", "all")
DEFAULT_DATE_FORMAT = os.getenv("DEFAULT_DATE_FORMAT", "auto")

EXPORT_SHEET_NAME = os.getenv("EXPORT_SHEET_NAME", "Transactions")


def configure_logging(level: str = None):
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
