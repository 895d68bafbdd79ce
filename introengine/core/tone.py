"""
Follow-up Tone Bands

Maps how long we've been waiting for an answer onto a ToneBand.
Shared by every composer that writes time-sensitive copy.
"""
from typing import Optional, Tuple
from introengine.models.outreach import ToneBand
from introengine.utils.numeric import round_half_up

# (max days inclusive, band), first match wins; anything longer is a soft closure
TONE_BANDS: Tuple[Tuple[int, ToneBand], ...] = (
    (3, ToneBand.GENTLE),
    (7, ToneBand.FRIENDLY),
    (14, ToneBand.RESPECTFUL_REMINDER),
    (30, ToneBand.RE_ENGAGEMENT),
)


def normalize_days(days_waiting: Optional[float]) -> int:
    """Round half-up and clamp to >= 0. Unknown means no wait at all."""
    if days_waiting is None:
        return 0
    return max(0, round_half_up(days_waiting))


def tone_for_days(days_waiting: Optional[float]) -> ToneBand:
    """
    >>> tone_for_days(0)
    <ToneBand.GENTLE: 'gentle'>
    >>> tone_for_days(45)
    <ToneBand.SOFT_CLOSURE: 'soft_closure'>
    """
    days = normalize_days(days_waiting)
    for max_days, band in TONE_BANDS:
        if days <= max_days:
            return band
    return ToneBand.SOFT_CLOSURE
