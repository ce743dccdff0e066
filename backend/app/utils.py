import logging
import math

logger = logging.getLogger("mgnrega.parse")


def is_absent(v):
    return v is None or (isinstance(v, str) and not v.strip())


def safe_float(v, field=None, failures=None):
    """Best-effort float parse: absent or unparsable values become 0.0.

    Present-but-unparsable values are counted under ``field`` when a
    ``collections.Counter`` is passed as ``failures``.
    """
    if is_absent(v):
        return 0.0
    try:
        if isinstance(v, str):
            v = v.replace(",", "").strip()
        result = float(v)
    except (TypeError, ValueError, OverflowError):
        result = None
    if result is None or not math.isfinite(result):
        logger.debug("Unparsable %s value %r, using 0", field or "numeric", v)
        if failures is not None and field:
            failures[field] += 1
        return 0.0
    return result


def district_key(name):
    """Grouping key for a district name: stripped and upper-cased."""
    if not isinstance(name, str):
        return ""
    return name.strip().upper()
