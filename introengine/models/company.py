from enum import StrEnum
from typing import Optional
from pydantic import Field
from introengine.models.base import IntroEngineModel, Identifier


class SizeBucket(StrEnum):
    STARTUP = "startup"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    ENTERPRISE = "enterprise"


class SignalType(StrEnum):
    HIRING = "hiring"
    GROWTH = "growth"
    OPERATIONAL_CHAOS = "operational_chaos"
    HR_SHORTAGE = "hr_shortage"
    EXPANSION = "expansion"
    COMPLIANCE_ISSUES = "compliance_issues"
    MANUAL_PROCESSES = "manual_processes"


class SignalStrength(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Company(IntroEngineModel):
    """A company of interest, as supplied by the caller."""
    id: Identifier = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    industry: Optional[str] = None
    # Open vocabulary ("1-10", "Mediana", "enterprise"...), see normalize_size_bucket
    size_bucket: Optional[str] = None
    domain: Optional[str] = None
    website: Optional[str] = None


class BuyingSignal(IntroEngineModel):
    """A typed observation about a company's buying intent."""
    type: SignalType
    description: Optional[str] = None
    strength: SignalStrength = SignalStrength.MEDIUM
