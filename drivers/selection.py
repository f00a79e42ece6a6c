"""
Purpose: Business rules for which drivers may receive batches.
What it does:
Accepts a pool of drivers and filters out ineligible ones, keeping the
caller's ordering (earlier drivers get first pick of the order pool).
"""

import logging
from typing import List, Sequence

from .models import Driver

logger = logging.getLogger(__name__)


def filter_available_drivers(drivers: Sequence[Driver]) -> List[Driver]:
    """
    Returns only drivers who are AVAILABLE and have a usable current location.
    """
    eligible = []

    for driver in drivers:
        if driver.is_busy:
            continue

        if driver.start_point is None:
            logger.warning("Driver %s is available but has no usable location, skipping", driver.id)
            continue

        eligible.append(driver)

    return eligible
