import datetime as dt
from enum import StrEnum
from typing import Optional
from pydantic import Field
from introengine.models.base import IntroEngineModel, Identifier


class RoleType(StrEnum):
    """Decision-maker families the outreach copy is written for."""
    CEO = "ceo"
    HR = "hr"
    OPERATIONS = "operations"
    FINANCE = "finance"
    OTHER = "other"


class ToneBand(StrEnum):
    """Follow-up tone, driven by how long we've been waiting."""
    GENTLE = "gentle"                            # 0-3 days
    FRIENDLY = "friendly"                        # 4-7 days
    RESPECTFUL_REMINDER = "respectful_reminder"  # 8-14 days
    RE_ENGAGEMENT = "re_engagement"              # 15-30 days
    SOFT_CLOSURE = "soft_closure"                # 31+ days


class FollowupAudience(StrEnum):
    BRIDGE_CONTACT = "bridge_contact"  # Asked for an intro, no answer yet
    PROSPECT = "prospect"              # Talked already, conversation froze
    OUTBOUND = "outbound"              # Cold message got no reply


class Role(IntroEngineModel):
    title: str = Field(..., min_length=1)
    seniority: Optional[str] = None


# ============================================
# OUTBOUND
# ============================================

class OutboundMessage(IntroEngineModel):
    short: str
    long: str
    cta: str
    reason_now: str


class OutboundScore(IntroEngineModel):
    lead_potential_score: int = Field(..., ge=0, le=100)


class OutboundResult(IntroEngineModel):
    outbound: OutboundMessage
    score: OutboundScore


# ============================================
# FOLLOW-UPS
# ============================================

class FollowupOpportunity(IntroEngineModel):
    """
    Opportunity-like record for follow-ups.
    Names are all optional; templates fall back to generic nouns.
    """
    id: Optional[Identifier] = None
    company_id: Optional[Identifier] = None
    company_name: Optional[str] = None
    target_contact_id: Optional[Identifier] = None
    target_contact_name: Optional[str] = None
    target_contact_role: Optional[str] = None
    bridge_contact_id: Optional[Identifier] = None
    bridge_contact_name: Optional[str] = None
    bridge_contact_role: Optional[str] = None
    # "intro" / "outbound", or a route type for freshly routed opportunities
    type: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[dt.datetime] = None
    last_action_at: Optional[dt.datetime] = None


class FollowupMessages(IntroEngineModel):
    bridge_contact: str
    prospect: str
    outbound: str


class FollowupResult(IntroEngineModel):
    followups: FollowupMessages
    tone: ToneBand
    days_waiting: int
