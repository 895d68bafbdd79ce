"""
API Routes

Modular route definitions for the IntroEngine API.
"""
from introengine.api.routes.health import router as health_router
from introengine.api.routes.metrics import router as metrics_router
from introengine.api.routes.relationships import router as relationships_router
from introengine.api.routes.scoring import router as scoring_router
from introengine.api.routes.outreach import router as outreach_router
from introengine.api.routes.advisor import router as advisor_router
from introengine.api.routes.account import router as account_router

__all__ = [
    "health_router",
    "metrics_router",
    "relationships_router",
    "scoring_router",
    "outreach_router",
    "advisor_router",
    "account_router",
]
