import logging
from typing import Optional

from doc_extract.templates import all_templates, lookup

logger = logging.getLogger(__name__)

UNKNOWN_BANK = "Unknown"


def match_template_key(text: str) -> Optional[str]:
    """
    Key of the first template (registry order) with a pattern found in text.

    First match wins: a statement that mentions several banks, e.g. an HDFC
    statement with "ICICI" in a memo line, resolves to whichever template
    the registry lists first.
    """
    lower_text = (text or "").lower()

    for key, template in all_templates():
        for pattern in template.detection_patterns:
            if pattern in lower_text:
                logger.debug("Matched template %s on pattern %r", key, pattern)
                return key
    return None


def detect_bank(text: str) -> str:
    template = lookup(match_template_key(text))
    return template.name if template else UNKNOWN_BANK
