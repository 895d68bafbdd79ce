"""Services package."""
from introengine.services.commercial_scorer import (
    CommercialScorer,
    calculate_commercial_scores,
    get_commercial_scorer,
)
from introengine.services.relationship_router import (
    RelationshipRouter,
    analyze_relationships,
    get_relationship_router,
)
from introengine.services.outbound_composer import (
    OutboundComposer,
    default_target_role_for_company,
    generate_outbound,
    get_outbound_composer,
)
from introengine.services.followup_composer import (
    FollowupComposer,
    days_without_activity,
    determine_followup_audience,
    generate_followups,
    get_followup_composer,
)
from introengine.services.weekly_advisor import (
    WeeklyAdvisor,
    analyze_weekly_activity,
    get_weekly_advisor,
)
from introengine.services.activity_aggregator import aggregate_weekly_activity

__all__ = [
    "CommercialScorer",
    "calculate_commercial_scores",
    "get_commercial_scorer",
    "RelationshipRouter",
    "analyze_relationships",
    "get_relationship_router",
    "OutboundComposer",
    "default_target_role_for_company",
    "generate_outbound",
    "get_outbound_composer",
    "FollowupComposer",
    "days_without_activity",
    "determine_followup_audience",
    "generate_followups",
    "get_followup_composer",
    "WeeklyAdvisor",
    "analyze_weekly_activity",
    "get_weekly_advisor",
    "aggregate_weekly_activity",
]
