"""
Follow-up Composer

Writes follow-up messages for opportunities that went quiet, one per
audience (bridge contact, prospect, cold outbound). The tone of each
message follows how long we've been waiting, see core/tone.py.
"""
import datetime as dt
import math
from typing import Dict, Optional, Tuple
from introengine.config import get_settings
from introengine.core.tone import normalize_days, tone_for_days
from introengine.models.outreach import (
    FollowupAudience,
    FollowupMessages,
    FollowupOpportunity,
    FollowupResult,
    ToneBand,
)
from introengine.utils.observability import logger

# ============================================
# TEMPLATES
# ============================================
# Placeholders: {greeting} ("Hola Ana," / "Hola,"), {target}, {company}, {product}

FOLLOWUP_TEMPLATES: Dict[Tuple[FollowupAudience, ToneBand], str] = {
    # Asked the bridge for an intro, no answer yet
    (FollowupAudience.BRIDGE_CONTACT, ToneBand.GENTLE): (
        "{greeting}\n\nSolo quería hacer un seguimiento sobre mi mensaje anterior. "
        "¿Tendrías un momento para presentarme a {target} en {company}?\n\n"
        "Gracias de antemano."
    ),
    (FollowupAudience.BRIDGE_CONTACT, ToneBand.FRIENDLY): (
        "{greeting}\n\nEspero que estés bien. Te escribo porque me gustaría conectarme con "
        "{target} en {company} y pensé que podrías ayudarme con una presentación.\n\n"
        "¿Te parece bien si te paso un mensaje corto que puedas compartir?"
    ),
    (FollowupAudience.BRIDGE_CONTACT, ToneBand.RESPECTFUL_REMINDER): (
        "{greeting}\n\nSé que estás ocupado. Solo quería recordarte que me gustaría "
        "conectarme con {target} en {company}.\n\n"
        "Si no es el momento adecuado, no hay problema. Solo avísame cuando puedas."
    ),
    (FollowupAudience.BRIDGE_CONTACT, ToneBand.RE_ENGAGEMENT): (
        "{greeting}\n\nEspero que todo esté bien. Te escribo porque me gustaría explorar una "
        "oportunidad con {company} y pensé que {target} podría estar interesado.\n\n"
        "Si puedes hacer una presentación breve, te lo agradecería. Si no, entiendo perfectamente."
    ),
    (FollowupAudience.BRIDGE_CONTACT, ToneBand.SOFT_CLOSURE): (
        "{greeting}\n\nHa pasado un tiempo desde que te pedí la presentación con {target} "
        "en {company}. Entiendo que quizá no sea el momento.\n\n"
        "Lo dejo aquí por ahora. Si en el futuro te parece oportuno, estaré encantado de retomarlo."
    ),

    # Already talked to the prospect, the conversation froze
    (FollowupAudience.PROSPECT, ToneBand.GENTLE): (
        "{greeting}\n\nSolo quería hacer un seguimiento sobre nuestra conversación anterior. "
        "¿Tienes alguna pregunta sobre cómo {product} podría ayudar a {company}?\n\n"
        "Estoy aquí para lo que necesites."
    ),
    (FollowupAudience.PROSPECT, ToneBand.FRIENDLY): (
        "{greeting}\n\nEspero que estés bien. Te escribo porque pensé que podría ser útil "
        "compartirte cómo otras empresas similares están usando {product} para simplificar "
        "la gestión de horarios y documentos.\n\n"
        "¿Te parece bien si coordinamos una llamada rápida de 15 minutos?"
    ),
    (FollowupAudience.PROSPECT, ToneBand.RESPECTFUL_REMINDER): (
        "{greeting}\n\nSé que estás ocupado. Solo quería recordarte que {product} puede ayudar "
        "a {company} a gestionar control horario, vacaciones y documentos sin complicarse.\n\n"
        "Si ahora no es el momento, no hay problema. Solo avísame cuando quieras retomar "
        "la conversación."
    ),
    (FollowupAudience.PROSPECT, ToneBand.RE_ENGAGEMENT): (
        "{greeting}\n\nEspero que todo esté bien. Te escribo porque las necesidades de gestión "
        "de RRHH pueden cambiar con el tiempo, y quería ver si ahora sería un buen momento "
        "para retomar nuestra conversación.\n\n"
        "Si te interesa, podemos hacer una demo rápida. Si no, entiendo perfectamente."
    ),
    (FollowupAudience.PROSPECT, ToneBand.SOFT_CLOSURE): (
        "{greeting}\n\nEspero que estés bien. Te escribo porque {company} sigue en mi radar y "
        "pensé que podría ser útil compartirte cómo {product} ha ayudado a empresas similares "
        "a simplificar su gestión de RRHH.\n\n"
        "Si te interesa explorarlo, estaré encantado de conversar. Si no, no hay problema."
    ),

    # Cold outbound that got no reply
    (FollowupAudience.OUTBOUND, ToneBand.GENTLE): (
        "{greeting}\n\nSolo quería hacer un seguimiento sobre mi mensaje anterior. Sé que estás "
        "ocupado, pero pensé que {product} podría ser útil para {company}.\n\n"
        "Si te interesa, podemos hacer una llamada rápida de 15 minutos. Si no, no hay problema."
    ),
    (FollowupAudience.OUTBOUND, ToneBand.FRIENDLY): (
        "{greeting}\n\nEspero que estés bien. Te escribo porque vi que {company} está en "
        "crecimiento y pensé que podría ser útil compartirte cómo {product} ayuda a empresas "
        "pequeñas a gestionar control horario y documentos sin complicarse.\n\n"
        "¿Te parece bien si coordinamos una conversación breve?"
    ),
    (FollowupAudience.OUTBOUND, ToneBand.RESPECTFUL_REMINDER): (
        "{greeting}\n\nSé que estás ocupado. Solo quería recordarte que {product} puede ayudar "
        "a {company} a simplificar la gestión de RRHH.\n\n"
        "Si ahora no es el momento, no hay problema. Solo avísame si en el futuro te interesa "
        "explorarlo."
    ),
    (FollowupAudience.OUTBOUND, ToneBand.RE_ENGAGEMENT): (
        "{greeting}\n\nEspero que todo esté bien. Te escribo porque las necesidades de gestión "
        "de RRHH pueden cambiar con el tiempo, y quería ver si ahora sería un buen momento "
        "para conversar sobre cómo {product} podría ayudar a {company}.\n\n"
        "Si te interesa, podemos hacer una demo rápida. Si no, entiendo perfectamente."
    ),
    (FollowupAudience.OUTBOUND, ToneBand.SOFT_CLOSURE): (
        "{greeting}\n\nEspero que estés bien. Te escribo porque {company} sigue en mi radar y "
        "pensé que podría ser útil compartirte cómo otras empresas similares están usando "
        "{product} para simplificar la gestión de horarios y documentos.\n\n"
        "Si te interesa explorarlo, estaré encantado de conversar. Si no, no hay problema "
        "y no te molestaré más."
    ),
}

# Nouns used when a name is missing
DEFAULT_TARGET_NAME = "ellos"
DEFAULT_BRIDGE_COMPANY = "la empresa"
DEFAULT_PROSPECT_COMPANY = "tu empresa"


def greeting(name: Optional[str]) -> str:
    name = (name or "").strip()
    return f"Hola {name}," if name else "Hola,"


# ============================================
# AUDIENCE DETECTION
# ============================================

TERMINAL_STATUSES = {"won", "lost", "closed"}


def determine_followup_audience(opportunity: FollowupOpportunity) -> Optional[FollowupAudience]:
    """
    Which follow-up an opportunity needs right now, if any.

    Intro opportunities: intro requested -> bridge, in progress/demo -> prospect.
    Outbound opportunities: in progress/sent -> outbound.
    Closed opportunities and anything else get none.
    """
    status = (opportunity.status or "").strip().lower()
    kind = (opportunity.type or "").strip().lower()

    if status in TERMINAL_STATUSES:
        return None

    if kind == "intro":
        if "intro_requested" in status:
            return FollowupAudience.BRIDGE_CONTACT
        if "progress" in status or status == "demo_scheduled":
            return FollowupAudience.PROSPECT

    if kind == "outbound":
        if "progress" in status or "sent" in status:
            return FollowupAudience.OUTBOUND

    return None


def _as_utc(value: dt.datetime) -> dt.datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.UTC)
    return value


def days_without_activity(
    last_action_at: Optional[dt.datetime],
    created_at: Optional[dt.datetime],
    now: Optional[dt.datetime] = None,
) -> int:
    """Whole days since the last action (or creation). Naive datetimes are UTC."""
    reference = last_action_at or created_at
    if reference is None:
        return 0

    now = _as_utc(now or dt.datetime.now(dt.UTC))
    elapsed = now - _as_utc(reference)
    return max(0, math.floor(elapsed.total_seconds() / 86400))


class FollowupComposer:
    """
    Renders the three follow-up variants for one opportunity.

    Usage:
        composer = FollowupComposer()
        result = composer.compose(opportunity, days_waiting=9)
        print(result.tone)                     # respectful_reminder
        print(result.followups.bridge_contact)
    """

    def compose(
        self,
        opportunity: FollowupOpportunity,
        days_waiting: Optional[float] = 0,
    ) -> FollowupResult:
        """
        Args:
            opportunity: Opportunity-like record; every name is optional
            days_waiting: Days since the last touch. Negative counts as 0,
                fractions are rounded half-up.
        """
        days = normalize_days(days_waiting)
        tone = tone_for_days(days)
        product = get_settings().product_name

        target_name = opportunity.target_contact_name or DEFAULT_TARGET_NAME

        messages = FollowupMessages(
            bridge_contact=self.render(
                FollowupAudience.BRIDGE_CONTACT, tone,
                greeting=greeting(opportunity.bridge_contact_name),
                target=target_name,
                company=opportunity.company_name or DEFAULT_BRIDGE_COMPANY,
                product=product,
            ),
            prospect=self.render(
                FollowupAudience.PROSPECT, tone,
                greeting=greeting(opportunity.target_contact_name),
                target=target_name,
                company=opportunity.company_name or DEFAULT_PROSPECT_COMPANY,
                product=product,
            ),
            outbound=self.render(
                FollowupAudience.OUTBOUND, tone,
                greeting=greeting(opportunity.target_contact_name),
                target=target_name,
                company=opportunity.company_name or DEFAULT_PROSPECT_COMPANY,
                product=product,
            ),
        )

        logger.debug(f"Follow-ups composed for opportunity {opportunity.id}: days={days} tone={tone}")

        return FollowupResult(followups=messages, tone=tone, days_waiting=days)

    @staticmethod
    def render(audience: FollowupAudience, tone: ToneBand, **fields: str) -> str:
        return FOLLOWUP_TEMPLATES[(audience, tone)].format(**fields)


# Singleton instance
_composer: Optional[FollowupComposer] = None


def get_followup_composer() -> FollowupComposer:
    """Get or create the follow-up composer singleton."""
    global _composer
    if _composer is None:
        _composer = FollowupComposer()
    return _composer


def generate_followups(
    opportunity: FollowupOpportunity,
    days_waiting: Optional[float] = 0,
) -> FollowupResult:
    """Convenience function: compose follow-ups with the shared composer."""
    return get_followup_composer().compose(opportunity, days_waiting)
