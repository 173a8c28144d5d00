"""Parse raw filter inputs (price bounds, BHK labels) at the UI boundary."""

import logging
import math
import re
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

BHK_RE = re.compile(r"^\s*(\d+)\s*bhk\s*$", re.IGNORECASE)
PRICE_RE = re.compile(r"^[+-]?(\d{1,3}(,\d{3})+|\d+)(\.\d+)?$")


def parse_price_bound(value) -> Tuple[Optional[float], bool]:
    """Parse a price input into ``(bound, valid)``.

    - blank / None -> ``(None, True)``: no constraint
    - numeric text (``"1500"``, ``"1,500"``, ``"1500.5"``) -> ``(1500.0, True)``
    - anything else -> ``(None, False)``: ignored, caller may warn
    """
    if value is None:
        return None, True
    if isinstance(value, bool):
        return None, False
    if isinstance(value, (int, float)):
        if math.isnan(value) or math.isinf(value):
            return None, False
        return float(value), True
    s = str(value).strip().replace("₹", "").strip()
    if not s:
        return None, True
    if not PRICE_RE.match(s):
        logger.debug("ignoring non-numeric price input %r", value)
        return None, False
    return float(s.replace(",", "")), True


def parse_bhk(label) -> Optional[int]:
    """Return the bedroom count in a label like ``"2 BHK"`` / ``"2bhk"``."""
    if label is None:
        return None
    m = BHK_RE.match(str(label))
    if not m:
        return None
    return int(m.group(1))


def bhk_label(n) -> str:
    return f"{int(n)} BHK"


def normalize_bhk_label(label) -> Optional[str]:
    """Canonicalise a BHK label, e.g. ``"3bhk"`` -> ``"3 BHK"``.

    Blank input means "no constraint" and returns None; a label that does not
    name a bedroom count raises ValueError.
    """
    if label is None or not str(label).strip():
        return None
    n = parse_bhk(label)
    if n is None:
        raise ValueError(f"not a BHK label: {label!r}")
    return bhk_label(n)
