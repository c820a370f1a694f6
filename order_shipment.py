# Module for calculating how long an order took to ship

import logging
import re
from datetime import datetime

logger = logging.getLogger(__name__)

DATE_FORMAT = '%Y-%m-%d'
DATE_PATTERN = re.compile(r'^\d{4}-(0[1-9]|1[0-2])-(0[1-9]|[12]\d|3[01])$', re.ASCII)

NOT_APPLICABLE = "Not Applicable"
INVALID_DATE_FORMAT = "Invalid date format"


def is_date_text(value):   # pattern check only, '2025-02-30' passes here
    return isinstance(value, str) and DATE_PATTERN.fullmatch(value) is not None


def is_missing(value):   # only None and the empty string; 0, False, [] are wrong types
    return value is None or (isinstance(value, str) and value == "")


def parse_order_date(value):
    """Parse a YYYY-MM-DD string into a date, raising ValueError on anything else."""
    if not is_date_text(value):
        raise ValueError(f"{value!r} does not match YYYY-MM-DD")
    return datetime.strptime(value, DATE_FORMAT).date()   # rejects impossible calendar dates


def compute_shipping_duration(order_date, shipped_date):
    """Return the days between order and shipment as text, e.g. '27 days'.

    Never raises: a missing date gives NOT_APPLICABLE and anything that does
    not parse gives INVALID_DATE_FORMAT. Shipped-before-ordered stays negative.
    """
    if is_missing(order_date) or is_missing(shipped_date):
        logger.debug("Missing date (order=%r, shipped=%r)", order_date, shipped_date)
        return NOT_APPLICABLE

    try:
        ordered = parse_order_date(order_date)
        shipped = parse_order_date(shipped_date)
    except (TypeError, ValueError) as err:
        logger.debug("Could not parse dates: %s", err)
        return INVALID_DATE_FORMAT

    return f"{(shipped - ordered).days} days"
