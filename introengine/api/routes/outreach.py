"""
Outreach Endpoints

Cold outbound drafts and follow-up messages.
"""
from fastapi import APIRouter

from introengine.api.models.requests import GenerateFollowupsRequest, GenerateOutboundRequest
from introengine.models.outreach import FollowupResult, OutboundResult
from introengine.services.followup_composer import get_followup_composer
from introengine.services.outbound_composer import get_outbound_composer
from introengine.utils.metrics import metrics

router = APIRouter(prefix="/api", tags=["Outreach"])


@router.post("/generate-outbound", response_model=OutboundResult)
async def generate_outbound(request: GenerateOutboundRequest):
    """Outbound message for a company with no introduction path."""
    with metrics.time_engine("outbound_composer"):
        return get_outbound_composer().compose(
            request.company_json,
            request.role,
            request.signals_json,
        )


@router.get("/generate-outbound")
async def generate_outbound_usage():
    """Usage information for the outbound composer."""
    return {
        "message": "Motor de outbound inteligente de IntroEngine",
        "usage": {
            "method": "POST",
            "endpoint": "/api/generate-outbound",
            "body": {
                "company_json": "Objeto Company con id, name, industry, size_bucket, etc.",
                "role": "String con el título del rol o {title, seniority}",
                "signals_json": "Array de BuyingSignal (opcional)"
            },
            "response": {
                "outbound": {
                    "short": "Mensaje corto (2-3 líneas)",
                    "long": "Mensaje detallado (4-6 líneas)",
                    "cta": "Llamada a la acción suave",
                    "reason_now": "Por qué es el momento adecuado"
                },
                "score": {
                    "lead_potential_score": "0-100"
                }
            }
        }
    }


@router.post("/generate-followups", response_model=FollowupResult)
async def generate_followups(request: GenerateFollowupsRequest):
    """Follow-ups for the bridge contact, the prospect and cold outbound."""
    with metrics.time_engine("followup_composer"):
        return get_followup_composer().compose(request.opportunity_json, request.days_waiting)


@router.get("/generate-followups")
async def generate_followups_usage():
    """Usage information for the follow-up composer."""
    return {
        "message": "Motor de follow-ups de IntroEngine",
        "usage": {
            "method": "POST",
            "endpoint": "/api/generate-followups",
            "body": {
                "opportunity_json": "Objeto Opportunity con nombres de empresa, contacto objetivo y puente",
                "days_waiting": "Días esperando respuesta (opcional, por defecto 0)"
            },
            "response": {
                "followups": {
                    "bridge_contact": "Follow-up al contacto puente",
                    "prospect": "Follow-up al prospecto",
                    "outbound": "Follow-up de outbound frío"
                },
                "tone": "gentle | friendly | respectful_reminder | re_engagement | soft_closure",
                "days_waiting": "Días normalizados"
            }
        }
    }
