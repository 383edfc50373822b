"""Sanitizing of user-facing text taken from quiz and catalog files."""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

# U+FFFD plus lone surrogates left behind by badly decoded files.
_INVALID_CHARACTERS = re.compile("[\ufffd\ud800-\udfff]")


def sanitize_text(value: object) -> str:
    """Strip replacement characters and surrounding whitespace.

    ``None`` becomes an empty string. Never raises: a value whose ``__str__``
    fails is logged and treated as empty.
    """
    if value is None:
        return ""
    try:
        text = str(value)
    except Exception:  # noqa: BLE001 - __str__ of arbitrary objects
        logger.warning("Could not convert %s to text", type(value).__name__, exc_info=True)
        return ""
    return _INVALID_CHARACTERS.sub("", text).strip()
