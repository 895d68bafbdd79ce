import datetime as dt
from enum import StrEnum
from typing import Annotated, List, Optional
from pydantic import BeforeValidator, Field
from introengine.models.base import Count, IntroEngineModel, Identifier, none_as_empty


class IndustryPerformance(IntroEngineModel):
    industry: str
    opportunities: Count = 0
    responses: Count = 0
    wins: Count = 0
    losses: Count = 0
    conversion_rate: float = Field(0.0, ge=0, le=100)


class WeeklyActivity(IntroEngineModel):
    """Aggregate counters for one reporting window."""
    intros_generated: Count = 0
    intros_requested: Count = 0
    intro_responses: Count = 0
    outbound_suggested: Count = 0
    outbound_executed: Count = 0
    wins: Count = 0
    losses: Count = 0
    opportunities_created: Count = 0
    industries_performance: Annotated[List[IndustryPerformance], BeforeValidator(none_as_empty)] = Field(
        default_factory=list
    )
    stalled_opportunities: Count = 0


class WeeklySummary(IntroEngineModel):
    intros_generated: str
    intros_requested: str
    responses: str
    outbound_pending: str
    wins: str
    losses: str


class WeeklyAdvisorResult(IntroEngineModel):
    summary: WeeklySummary
    insights: List[str] = Field(..., min_length=3, max_length=3)
    recommended_actions: List[str] = Field(..., min_length=3, max_length=3)


# ============================================
# RAW RECORDS FOR AGGREGATION
# ============================================

class OpportunityKind(StrEnum):
    INTRO = "intro"
    OUTBOUND = "outbound"


class OpportunityActivityRecord(IntroEngineModel):
    """One opportunity row as storage reports it for the weekly window."""
    id: Optional[Identifier] = None
    company_id: Optional[Identifier] = None
    type: OpportunityKind
    status: str = "suggested"
    created_at: dt.datetime
    last_action_at: Optional[dt.datetime] = None
