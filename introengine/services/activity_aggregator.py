"""
Weekly Activity Aggregation

Reduces raw opportunity records into the WeeklyActivity counters the
weekly advisor reads. Storage hands us the rows; nothing here queries it.
"""
import datetime as dt
from typing import Dict, List, Mapping, Optional, Sequence
from introengine.models.activity import (
    IndustryPerformance,
    OpportunityActivityRecord,
    OpportunityKind,
    WeeklyActivity,
)
from introengine.utils.numeric import round_half_up
from introengine.utils.observability import log_engine_execution

UNKNOWN_INDUSTRY = "Unknown"
STALLED_AFTER = dt.timedelta(days=7)

WON = "won"
LOST = "lost"
TERMINAL_STATUSES = {WON, LOST, "closed"}
UNANSWERED_STATUSES = {"suggested", "intro_requested"}
OUTBOUND_EXECUTED_STATUSES = {"in_progress", "outbound_sent"}


def _as_utc(value: dt.datetime) -> dt.datetime:
    return value.replace(tzinfo=dt.UTC) if value.tzinfo is None else value


def _status(record: OpportunityActivityRecord) -> str:
    return (record.status or "").strip().lower()


class _Window:
    """Closed [start, end] interval, comparing naive datetimes as UTC."""

    def __init__(self, start: dt.datetime, end: dt.datetime):
        self.start = _as_utc(start)
        self.end = _as_utc(end)

    def __contains__(self, moment: Optional[dt.datetime]) -> bool:
        return moment is not None and self.start <= _as_utc(moment) <= self.end


def aggregate_weekly_activity(
    records: Sequence[OpportunityActivityRecord],
    window_start: dt.datetime,
    window_end: dt.datetime,
    industry_by_company: Optional[Mapping[str, Optional[str]]] = None,
) -> WeeklyActivity:
    """
    Count one window's activity.

    Only records created or touched inside the window take part. Intro
    responses are intros whose status moved past "requested" during the
    window; executed outbound is outbound sent or in progress during the
    window. A record is stalled when it is still open and its last action
    (or creation) is at least seven days before window_end.

    Args:
        records: Opportunity rows, intro and outbound mixed
        window_start: First instant of the window
        window_end: Last instant of the window
        industry_by_company: company_id -> industry, for the breakdown

    Returns:
        WeeklyActivity with counters, industry breakdown and stalled count
    """
    window = _Window(window_start, window_end)
    industry_by_company = industry_by_company or {}

    in_window = [
        record for record in records
        if record.created_at in window or record.last_action_at in window
    ]
    intros = [r for r in in_window if r.type == OpportunityKind.INTRO]
    outbound = [r for r in in_window if r.type == OpportunityKind.OUTBOUND]

    intro_responses = [
        r for r in intros
        if _status(r) not in UNANSWERED_STATUSES and r.last_action_at in window
    ]

    stalled_cutoff = window.end - STALLED_AFTER
    stalled = [
        r for r in in_window
        if _status(r) not in TERMINAL_STATUSES
        and _as_utc(r.last_action_at or r.created_at) <= stalled_cutoff
    ]

    activity = WeeklyActivity(
        intros_generated=sum(1 for r in intros if r.created_at in window),
        intros_requested=sum(1 for r in intros if "intro_requested" in _status(r)),
        intro_responses=len(intro_responses),
        outbound_suggested=sum(1 for r in outbound if r.created_at in window),
        outbound_executed=sum(
            1 for r in outbound
            if _status(r) in OUTBOUND_EXECUTED_STATUSES and r.last_action_at in window
        ),
        wins=sum(1 for r in in_window if _status(r) == WON),
        losses=sum(1 for r in in_window if _status(r) == LOST),
        opportunities_created=sum(1 for r in in_window if r.created_at in window),
        industries_performance=industry_breakdown(in_window, industry_by_company, intro_responses),
        stalled_opportunities=len(stalled),
    )

    log_engine_execution(
        engine="ActivityAggregator",
        action="aggregate",
        records=len(records),
        in_window=len(in_window),
        opportunities_created=activity.opportunities_created,
        stalled=activity.stalled_opportunities,
    )
    return activity


def industry_breakdown(
    records: Sequence[OpportunityActivityRecord],
    industry_by_company: Mapping[str, Optional[str]],
    responses: Sequence[OpportunityActivityRecord] = (),
) -> List[IndustryPerformance]:
    """Per-industry counts, busiest industry first (ties keep first-seen order)."""
    responded = {id(r) for r in responses}
    stats: Dict[str, Dict[str, int]] = {}

    for record in records:
        if not record.company_id:
            continue
        industry = industry_by_company.get(record.company_id) or UNKNOWN_INDUSTRY
        entry = stats.setdefault(industry, {"opportunities": 0, "responses": 0, "wins": 0, "losses": 0})
        entry["opportunities"] += 1
        if id(record) in responded:
            entry["responses"] += 1
        if _status(record) == WON:
            entry["wins"] += 1
        elif _status(record) == LOST:
            entry["losses"] += 1

    breakdown = [
        IndustryPerformance(
            industry=industry,
            conversion_rate=round_half_up(entry["wins"] / entry["opportunities"] * 100),
            **entry,
        )
        for industry, entry in stats.items()
    ]
    return sorted(breakdown, key=lambda item: item.opportunities, reverse=True)
