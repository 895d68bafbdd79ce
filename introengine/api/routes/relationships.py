"""
Relationship Endpoints

Routes target decision-makers through the account's contact graph.
"""
from fastapi import APIRouter

from introengine.api.models.requests import AnalyzeRelationshipsRequest
from introengine.models.opportunity import AnalysisResult
from introengine.services.relationship_router import get_relationship_router
from introengine.utils.metrics import metrics

router = APIRouter(prefix="/api", tags=["Relationships"])


@router.post("/analyze-relationships", response_model=AnalysisResult)
async def analyze_relationships(request: AnalyzeRelationshipsRequest):
    """
    Find the best introduction route to each target.

    Targets without a route of confidence >= 30 are left out.
    Opportunities come back sorted by intro_strength_score.
    """
    with metrics.time_engine("relationship_router"):
        return get_relationship_router().find_routes(
            request.contacts_json,
            request.target_contacts_json,
            request.companies_json,
        )


@router.get("/analyze-relationships")
async def analyze_relationships_usage():
    """Usage information for the relationship router."""
    return {
        "message": "Motor de detección de relaciones de IntroEngine",
        "usage": {
            "method": "POST",
            "endpoint": "/api/analyze-relationships",
            "body": {
                "contacts_json": "Array de contactos del usuario",
                "target_contacts_json": "Array de contactos objetivo (role_title, seniority y company_id requeridos)",
                "companies_json": "Array de empresas"
            },
            "response": {
                "opportunities": "Array de oportunidades detectadas con rutas de conexión"
            }
        },
        "route_types": {
            "direct": "El usuario conoce directamente al contacto objetivo",
            "second_level": "El usuario conoce a alguien que conoce al objetivo",
            "inferred": "Relación probable deducida de empresas, roles o interacciones compartidas"
        }
    }
