# src/task_cli/tasks/task_time.py

"""
Display-side timestamp conversion.

The store hands back naive timestamps. Before display they are interpreted as
wall-clock time in the display zone (system local by default):
- ambiguous times (DST fold) resolve to the earlier instant,
- non-existent times (DST gap) follow an explicit GapPolicy.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone, tzinfo
from enum import StrEnum

logger = logging.getLogger(__name__)

DISPLAY_FORMAT = "%Y-%m-%d %H:%M:%S"


class GapPolicy(StrEnum):
    ERROR = "error"  # abort, like the reference behaviour
    SHIFT = "shift"  # move forward past the gap
    RAW = "raw"  # show the stored value unchanged


class TimestampConversionError(ValueError):
    """A stored timestamp has no valid interpretation in the display zone."""


def _attach(naive: datetime, tz: tzinfo | None, fold: int) -> datetime:
    if tz is None:
        # Naive astimezone() interprets the value as system local time and honours fold.
        return naive.replace(fold=fold).astimezone()
    return naive.replace(tzinfo=tz, fold=fold)


def _round_trips(aware: datetime, naive: datetime, tz: tzinfo | None) -> bool:
    back = aware.astimezone(timezone.utc).astimezone(tz)
    return back.replace(tzinfo=None) == naive


def localize(
    naive: datetime,
    tz: tzinfo | None = None,
    *,
    gap_policy: GapPolicy = GapPolicy.ERROR,
) -> datetime:
    """
    Attach the display zone to a naive stored timestamp.

    Returns an aware datetime, or the naive input itself under GapPolicy.RAW
    when the wall-clock time falls into a DST gap.
    """
    if naive.tzinfo is not None:
        return naive.astimezone(tz)

    candidates = [_attach(naive, tz, fold) for fold in (0, 1)]
    valid = [c for c in candidates if _round_trips(c, naive, tz)]

    if valid:
        return min(valid, key=lambda c: c.astimezone(timezone.utc))

    if gap_policy is GapPolicy.SHIFT:
        # fold=0 inside a gap uses the pre-transition offset, which lands past the gap.
        shifted = candidates[0].astimezone(tz)
        logger.debug("Timestamp %s falls in a DST gap, shifted to %s", naive, shifted)
        return shifted

    if gap_policy is GapPolicy.RAW:
        logger.debug("Timestamp %s falls in a DST gap, shown as stored", naive)
        return naive

    raise TimestampConversionError(
        f"Failed to convert naive datetime {naive.isoformat(sep=' ')} to local datetime "
        "(non-existent local time)"
    )


def format_timestamp(
    naive: datetime,
    tz: tzinfo | None = None,
    *,
    gap_policy: GapPolicy = GapPolicy.ERROR,
) -> str:
    return localize(naive, tz, gap_policy=gap_policy).strftime(DISPLAY_FORMAT)
