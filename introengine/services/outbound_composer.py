"""
Outbound Composer

Writes cold outreach for companies we have no bridge into: a short and a
long message, a soft call to action and a "why now" line, plus a
lead_potential_score that only needs company, role and signals.

Copy is selected from lookup tables keyed by (RoleType, primary signal),
where the primary signal is None when the company shows no signals at all.
Every combination is present in the tables, so selection never fails.
"""
from typing import Dict, List, Optional, Sequence, Tuple, Union
from introengine.config import get_settings
from introengine.core.classifiers import classify_role, normalize_size_bucket
from introengine.models.company import BuyingSignal, Company, SignalStrength, SignalType, SizeBucket
from introengine.models.outreach import (
    OutboundMessage,
    OutboundResult,
    OutboundScore,
    Role,
    RoleType,
)
from introengine.utils.numeric import clamp_score
from introengine.utils.observability import logger
from introengine.utils.text_normalizer import normalize_name

TemplateKey = Tuple[RoleType, Optional[SignalType]]

SIGNAL_KEYS: Tuple[Optional[SignalType], ...] = (None, *SignalType)

# Signals the product actually solves, most relevant first
RELEVANT_SIGNALS: Tuple[SignalType, ...] = (
    SignalType.HR_SHORTAGE,
    SignalType.OPERATIONAL_CHAOS,
    SignalType.MANUAL_PROCESSES,
    SignalType.HIRING,
    SignalType.COMPLIANCE_ISSUES,
)

STRENGTH_POINTS: Dict[SignalStrength, int] = {
    SignalStrength.LOW: 1,
    SignalStrength.MEDIUM: 2,
    SignalStrength.HIGH: 3,
}


def _complete(no_signal: Dict[RoleType, str],
              any_signal: Dict[RoleType, str],
              overrides: Dict[TemplateKey, str]) -> Dict[TemplateKey, str]:
    """
    Expand per-role defaults into a full RoleType x signal table.
    Roles missing from a default fall back to its OTHER entry.
    """
    table = {}
    for role in RoleType:
        for signal in SIGNAL_KEYS:
            by_role = no_signal if signal is None else any_signal
            table[(role, signal)] = overrides.get((role, signal), by_role.get(role, by_role[RoleType.OTHER]))
    return table


# ============================================
# SHORT MESSAGES (2-3 lines)
# ============================================

_SHORT_GENERIC = "Hola, vi que {company} está en crecimiento. {pitch}"

_SHORT_BY_ROLE: Dict[RoleType, str] = {
    RoleType.CEO: "Hola, como CEO de {company}, sé que cada minuto cuenta. {pitch}",
    RoleType.HR: (
        "Hola, como responsable de RRHH en {company}, sé lo que implica gestionar "
        "control horario y documentos laborales. {pitch}"
    ),
    RoleType.OPERATIONS: (
        "Hola, como responsable de Operaciones en {company}, entiendo la importancia "
        "de tener procesos claros. {pitch}"
    ),
    RoleType.OTHER: _SHORT_GENERIC,
}

SHORT_TEMPLATES: Dict[TemplateKey, str] = _complete(
    no_signal=_SHORT_BY_ROLE,
    any_signal=_SHORT_BY_ROLE,
    overrides={
        (RoleType.CEO, SignalType.HR_SHORTAGE): (
            "Hola, vi que {company} está creciendo y contratando. Como CEO, sé que "
            "gestionar el equipo puede volverse complejo.\n\n{pitch}"
        ),
        (RoleType.CEO, SignalType.OPERATIONAL_CHAOS): (
            "Hola, entiendo que en {company} están enfocados en escalar operaciones. "
            "La gestión de horarios y documentos puede ser un cuello de botella.\n\n{pitch}"
        ),
        (RoleType.HR, SignalType.HR_SHORTAGE): (
            "Hola, veo que {company} está en crecimiento. Como responsable de RRHH, "
            "gestionar control horario y vacaciones puede volverse abrumador.\n\n{pitch}"
        ),
        (RoleType.HR, SignalType.MANUAL_PROCESSES): (
            "Hola, sé que en RRHH de {company} probablemente estás gestionando horarios "
            "y documentos de forma manual. {pitch}"
        ),
        (RoleType.OPERATIONS, SignalType.OPERATIONAL_CHAOS): (
            "Hola, veo que {company} está escalando operaciones. La gestión de horarios "
            "del equipo puede ser un desafío operativo.\n\n{pitch}"
        ),
    },
)


# ============================================
# LONG MESSAGES (4-6 lines)
# ============================================

_LONG_MANUAL_PROCESSES = (
    "Sé que muchas empresas pequeñas como {company} gestionan el control horario y los "
    "documentos laborales de forma manual: hojas de cálculo, emails, papel.\n\n"
    "{pitch} Es una solución simple que puede ahorrar horas cada semana."
)

_LONG_NO_SIGNAL: Dict[RoleType, str] = {
    RoleType.HR: (
        "Como responsable de RRHH en {company}, sé lo que implica gestionar control horario, "
        "vacaciones y documentos laborales. {pitch}\n\n"
        "Puede ahorrarte tiempo y reducir errores en la gestión administrativa."
    ),
    RoleType.CEO: (
        "Como CEO de {company}, sé que cada proceso que puedas simplificar cuenta. {pitch}\n\n"
        "Es especialmente útil para empresas pequeñas que están creciendo y necesitan "
        "procesos más estructurados."
    ),
    RoleType.OTHER: (
        "{pitch}\n\n"
        "Puede ayudar a {company} a gestionar mejor el equipo y reducir la carga administrativa."
    ),
}

_LONG_ANY_SIGNAL: Dict[RoleType, str] = {
    RoleType.OTHER: (
        "Veo que {company} está en crecimiento. {pitch}\n\n"
        "Puede ayudar a simplificar la gestión de tu equipo y reducir el trabajo administrativo."
    ),
}

LONG_TEMPLATES: Dict[TemplateKey, str] = _complete(
    no_signal=_LONG_NO_SIGNAL,
    any_signal=_LONG_ANY_SIGNAL,
    overrides={
        **{(role, SignalType.MANUAL_PROCESSES): _LONG_MANUAL_PROCESSES for role in RoleType},
        (RoleType.HR, SignalType.HR_SHORTAGE): (
            "Veo que {company} está en una fase de crecimiento y contratación. Como responsable "
            "de RRHH, sé que esto significa más trabajo administrativo: control de horarios, "
            "gestión de vacaciones, y documentación laboral.\n\n"
            "{pitch} {product} automatiza estos procesos para que puedas enfocarte en lo que "
            "realmente importa: las personas."
        ),
        (RoleType.OPERATIONS, SignalType.OPERATIONAL_CHAOS): (
            "Entiendo que {company} está escalando operaciones. Cuando el equipo crece, la gestión "
            "de horarios y la coordinación se vuelven más complejas.\n\n"
            "{pitch} Esto puede ayudar a reducir la carga operativa y dar más visibilidad sobre "
            "el trabajo del equipo."
        ),
        (RoleType.CEO, SignalType.HIRING): (
            "Vi que {company} está contratando. Como CEO, sé que cada nuevo empleado significa más "
            "gestión administrativa: horarios, vacaciones, documentos.\n\n"
            "{pitch} Es especialmente útil cuando el equipo está creciendo."
        ),
    },
)

LONG_GREETING = "Hola,\n\n"


# ============================================
# CTA / REASON NOW
# ============================================

CTA_BY_ROLE: Dict[RoleType, str] = {
    RoleType.HR: (
        "¿Te gustaría que te muestre cómo funciona? Puedo hacerte una demo rápida "
        "de 15 minutos sin compromiso."
    ),
    RoleType.CEO: (
        "¿Te parece bien si coordinamos una breve conversación para ver si tiene "
        "sentido para tu equipo?"
    ),
}
DEFAULT_CTA = "¿Te gustaría conocer más? Puedo contarte cómo funciona en una llamada rápida."

REASON_NOW_BY_SIGNAL: Dict[SignalType, str] = {
    SignalType.HIRING: (
        "Es el momento ideal porque están contratando. Implementar {product} ahora facilitará "
        "la gestión de los nuevos empleados desde el día uno."
    ),
    SignalType.HR_SHORTAGE: (
        "Con el crecimiento del equipo, la carga administrativa aumenta. Implementar ahora "
        "evitará que se vuelva inmanejable."
    ),
    SignalType.OPERATIONAL_CHAOS: (
        "Es mejor establecer procesos claros ahora, antes de que el equipo crezca más "
        "y la complejidad aumente."
    ),
    SignalType.MANUAL_PROCESSES: (
        "Cada día que pasa con procesos manuales es tiempo perdido. Automatizar ahora "
        "ahorrará horas cada semana."
    ),
    SignalType.COMPLIANCE_ISSUES: (
        "Es importante tener los procesos en orden para cumplir con normativas laborales. "
        "{product} ayuda a mantener todo documentado correctamente."
    ),
}

SMALL_COMPANY_REASON = (
    "Para empresas pequeñas en crecimiento, es el momento perfecto para establecer "
    "procesos que escalen con el equipo."
)
GENERIC_REASON = (
    "Es un buen momento para evaluar herramientas que pueden simplificar la gestión "
    "del equipo y ahorrar tiempo."
)

SMALL_BUCKETS = {SizeBucket.STARTUP, SizeBucket.SMALL}


# ============================================
# DEFAULT TARGET ROLE
# ============================================

CEO_TITLE = "CEO"
HR_TITLE = "Responsable de RRHH"
OPERATIONS_TITLE = "Director de Operaciones"

# Hourly-staff industries where operations/HR owns scheduling
SMALL_OPERATIONS_INDUSTRIES = ("retail", "servicios", "comercio")
MEDIUM_HR_INDUSTRIES = ("retail", "servicios", "manufactura")


def _industry_mentions(industry: Optional[str], keywords: Sequence[str]) -> bool:
    text = normalize_name(industry)
    return bool(text) and any(keyword in text for keyword in keywords)


def default_target_role_for_company(company: Company) -> str:
    """
    Who to write to when we have no named decision-maker.

    Small companies: the CEO decides (operations in retail/services/commerce).
    Medium: HR in hourly-staff industries, otherwise operations.
    Large and enterprise: HR.
    """
    size = normalize_size_bucket(company.size_bucket)

    if size in SMALL_BUCKETS:
        if _industry_mentions(company.industry, SMALL_OPERATIONS_INDUSTRIES):
            return OPERATIONS_TITLE
        return CEO_TITLE

    if size == SizeBucket.MEDIUM:
        if _industry_mentions(company.industry, MEDIUM_HR_INDUSTRIES):
            return HR_TITLE
        return OPERATIONS_TITLE

    return HR_TITLE


def as_role(role: Union[Role, str, None]) -> Role:
    """Accept a bare title or a Role. Empty input is an unnamed role."""
    if isinstance(role, Role):
        return role
    return Role(title=(role or "").strip() or "Responsable")


class OutboundComposer:
    """
    Composes cold outreach when no introduction path exists.

    Usage:
        composer = OutboundComposer()
        result = composer.compose(company, "Responsable de RRHH", signals)
        print(result.outbound.short)
        print(result.score.lead_potential_score)
    """

    # ============================================
    # LEAD POTENTIAL
    # ============================================
    LEAD_BASE = 50

    SIZE_ADJUSTMENTS: Dict[SizeBucket, int] = {
        SizeBucket.STARTUP: 20,
        SizeBucket.SMALL: 20,
        SizeBucket.MEDIUM: 10,
        SizeBucket.LARGE: -10,
        SizeBucket.ENTERPRISE: -10,
    }

    ROLE_ADJUSTMENTS: Dict[RoleType, int] = {
        RoleType.HR: 15,
        RoleType.CEO: 10,
        RoleType.OPERATIONS: 8,
        RoleType.FINANCE: 5,
        RoleType.OTHER: 0,
    }

    RELEVANT_SIGNAL_CAP = 20
    OTHER_SIGNAL_CAP = 10
    MULTI_SIGNAL_BONUSES = ((2, 5), (3, 5))

    HOURLY_STAFF_INDUSTRIES = ("retail", "servicios", "hospitalidad", "restaurante", "comercio")
    HOURLY_STAFF_BONUS = 5

    def compose(
        self,
        company: Company,
        role: Union[Role, str],
        signals: Optional[Sequence[BuyingSignal]] = None,
    ) -> OutboundResult:
        """
        Build the outbound draft for one company and target role.

        Args:
            company: Target company
            role: Role title, or a Role with title/seniority
            signals: Buying signals observed for the company; may be empty

        Returns:
            OutboundResult with the message parts and lead_potential_score
        """
        signals = list(signals or [])
        role = as_role(role)
        role_type = classify_role(role.title, role.seniority)
        primary = self.primary_signal(signals)
        primary_type = primary.type if primary else None

        settings = get_settings()
        fields = {
            "company": company.name,
            "pitch": settings.resolved_pitch,
            "product": settings.product_name,
        }

        message = OutboundMessage(
            short=SHORT_TEMPLATES[(role_type, primary_type)].format(**fields),
            long=(LONG_GREETING + LONG_TEMPLATES[(role_type, primary_type)].format(**fields)).strip(),
            cta=CTA_BY_ROLE.get(role_type, DEFAULT_CTA),
            reason_now=self.reason_now(primary_type, company).format(**fields),
        )
        score = self.lead_potential_score(company, role_type, signals)

        logger.debug(
            f"Outbound composed for company {company.id}: role={role_type} "
            f"primary_signal={primary_type} lead_potential={score}"
        )

        return OutboundResult(outbound=message, score=OutboundScore(lead_potential_score=score))

    def primary_signal(self, signals: Sequence[BuyingSignal]) -> Optional[BuyingSignal]:
        """
        The signal the copy is written around.

        Among relevant signals: strongest first, then relevance rank, then
        input order. Without relevant signals, the first signal given.
        """
        relevant = [s for s in signals if s.type in RELEVANT_SIGNALS]
        if not relevant:
            return signals[0] if signals else None

        ranked = sorted(
            enumerate(relevant),
            key=lambda item: (
                -STRENGTH_POINTS[item[1].strength],
                RELEVANT_SIGNALS.index(item[1].type),
                item[0],
            ),
        )
        return ranked[0][1]

    def reason_now(self, primary_type: Optional[SignalType], company: Company) -> str:
        if primary_type in REASON_NOW_BY_SIGNAL:
            return REASON_NOW_BY_SIGNAL[primary_type]
        if normalize_size_bucket(company.size_bucket) in SMALL_BUCKETS:
            return SMALL_COMPANY_REASON
        return GENERIC_REASON

    def lead_potential_score(
        self,
        company: Company,
        role_type: RoleType,
        signals: List[BuyingSignal],
    ) -> int:
        """Outbound-only lead score, independent of any routed opportunity."""
        score = self.LEAD_BASE
        score += self.SIZE_ADJUSTMENTS[normalize_size_bucket(company.size_bucket)]
        score += self.ROLE_ADJUSTMENTS[role_type]

        if signals:
            total_strength = sum(STRENGTH_POINTS[s.strength] for s in signals)
            if any(s.type in RELEVANT_SIGNALS for s in signals):
                score += min(self.RELEVANT_SIGNAL_CAP, total_strength * 2)
            else:
                score += min(self.OTHER_SIGNAL_CAP, total_strength)

            for min_count, bonus in self.MULTI_SIGNAL_BONUSES:
                if len(signals) >= min_count:
                    score += bonus

        if _industry_mentions(company.industry, self.HOURLY_STAFF_INDUSTRIES):
            score += self.HOURLY_STAFF_BONUS

        return clamp_score(score)


# Singleton instance
_composer: Optional[OutboundComposer] = None


def get_outbound_composer() -> OutboundComposer:
    """Get or create the outbound composer singleton."""
    global _composer
    if _composer is None:
        _composer = OutboundComposer()
    return _composer


def generate_outbound(
    company: Company,
    role: Union[Role, str],
    signals: Optional[Sequence[BuyingSignal]] = None,
) -> OutboundResult:
    """Convenience function: compose outbound with the shared composer."""
    return get_outbound_composer().compose(company, role, signals)
