"""
Date-time encoding used as the trick's hidden payload.

The target number is the month (unpadded) followed by the zero-padded day,
hour (24h) and minute:

    2026-02-16 14:18  ->  "2161418"  ->  2161418

The smallest possible value is 1010000 (January 1st, 00:00), far above any
sum two audience members will type in.
"""

from datetime import datetime, timedelta
import logging

logger = logging.getLogger(__name__)

# Seconds past which the optional rounding policy moves to the next minute
ROUND_UP_AFTER_SECONDS = 30


def resolve_minute(now: datetime, round_to_next_minute: bool = False) -> datetime:
    """
    Resolve the minute the target number is computed for.

    With ``round_to_next_minute`` enabled, any time more than 30 seconds
    into a minute counts as the following minute, so the reveal lands on
    the time the audience will see a few moments later.
    """
    if round_to_next_minute and now.second > ROUND_UP_AFTER_SECONDS:
        return now + timedelta(minutes=1)
    return now


def encode(now: datetime, round_to_next_minute: bool = False) -> int:
    """
    Encode a date-time as the trick's target number.

    Args:
        now: Current date-time, already resolved by the caller
        round_to_next_minute: Apply the next-minute rounding policy

    Returns:
        Positive integer with at most 7 decimal digits
    """
    moment = resolve_minute(now, round_to_next_minute)
    target = int(
        f"{moment.month}{moment.day:02d}{moment.hour:02d}{moment.minute:02d}"
    )
    logger.debug(f"Encoded {moment:%Y-%m-%d %H:%M} as target {target}")
    return target
