"""
Weekly Advisor

Reads one week of aggregate activity and answers like a sales manager
would: a plain summary of the counters, three insights and three
recommended actions.

Insights and actions are built the same way: every dimension contributes
at most one candidate, then generic fillers are appended and the list is
cut to exactly three.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional, Sequence
from introengine.models.activity import (
    IndustryPerformance,
    WeeklyActivity,
    WeeklyAdvisorResult,
    WeeklySummary,
)
from introengine.utils.numeric import round_half_up, to_decimal
from introengine.utils.observability import logger

ITEMS_PER_SECTION = 3

INSIGHT_FILLERS = (
    "Esta semana no hubo actividad registrada. Es momento de comenzar a generar oportunidades.",
    "Considera aumentar tu actividad de prospección para generar más oportunidades.",
    "Mantén la consistencia en tu actividad semanal para construir un pipeline sólido.",
)

ACTION_FILLERS = (
    "Comienza a generar oportunidades: identifica empresas objetivo y contacta a tus "
    "conexiones para pedir intros.",
    "Mantén la consistencia: establece una rutina semanal de prospección para construir "
    "un pipeline sólido.",
    "Revisa y optimiza: analiza qué está funcionando y duplica esos esfuerzos.",
)


def plural(count: int, singular: str, plural_form: str) -> str:
    """'1 intro generada' / '3 intros generadas'"""
    return f"{count} {singular if count == 1 else plural_form}"


def take_exactly(candidates: Sequence[str], fillers: Sequence[str], n: int = ITEMS_PER_SECTION) -> List[str]:
    """
    First n candidates, topped up with fillers.

    Fillers are positional: with k candidates the list continues from
    fillers[k], so the same shortfall always reads the same way.
    """
    return (list(candidates) + list(fillers[len(candidates):]))[:n]


def percentage(part: int, whole: int) -> Decimal:
    """Decimal so that arbitrarily large counters never overflow a float."""
    return to_decimal(part) * 100 / whole if whole > 0 else Decimal(0)


@dataclass(frozen=True)
class ActivityRates:
    """Rates derived once per analysis, all in percent."""
    response_rate: Decimal
    conversion_rate: Decimal
    outbound_execution_rate: Decimal
    outbound_pending: int

    @classmethod
    def from_activity(cls, activity: WeeklyActivity) -> "ActivityRates":
        return cls(
            response_rate=percentage(activity.intro_responses, activity.intros_requested),
            conversion_rate=percentage(activity.wins, activity.intro_responses),
            outbound_execution_rate=percentage(activity.outbound_executed, activity.outbound_suggested),
            outbound_pending=max(0, activity.outbound_suggested - activity.outbound_executed),
        )


def best_industry(industries: Sequence[IndustryPerformance]) -> Optional[IndustryPerformance]:
    """Highest conversion rate; the first listed wins ties. Input is not reordered."""
    if not industries:
        return None
    return max(industries, key=lambda item: item.conversion_rate)


class WeeklyAdvisor:
    """
    Turns WeeklyActivity counters into a digest.

    Usage:
        advisor = WeeklyAdvisor()
        result = advisor.analyze(WeeklyActivity(intros_generated=7, wins=1))
        for line in result.insights:
            print(line)
    """

    HIGH_VOLUME = 10
    MODERATE_VOLUME = 5

    EXCEPTIONAL_RESPONSE = 50
    GOOD_RESPONSE = 30
    MODERATE_RESPONSE = 15

    HIGH_CONVERSION = 30
    MODERATE_CONVERSION = 15
    ACTION_CONVERSION = 20

    LOW_EXECUTION = 50
    PARTIAL_EXECUTION = 80
    OUTBOUND_BACKLOG = 5

    STANDOUT_INDUSTRY_CONVERSION = 20

    def analyze(self, activity: WeeklyActivity) -> WeeklyAdvisorResult:
        rates = ActivityRates.from_activity(activity)

        insights = take_exactly(self.insight_candidates(activity, rates), INSIGHT_FILLERS)
        actions = take_exactly(self.action_candidates(activity, rates), ACTION_FILLERS)

        logger.debug(
            f"Weekly digest: intros={activity.intros_generated} "
            f"response_rate={round_half_up(rates.response_rate)}% "
            f"insights={len(insights)} actions={len(actions)}"
        )

        return WeeklyAdvisorResult(
            summary=self.summarize(activity, rates),
            insights=insights,
            recommended_actions=actions,
        )

    # ============================================
    # SUMMARY
    # ============================================

    def summarize(self, activity: WeeklyActivity, rates: ActivityRates) -> WeeklySummary:
        pending = rates.outbound_pending
        return WeeklySummary(
            intros_generated=plural(activity.intros_generated, "intro generada", "intros generadas")
            + " esta semana",
            intros_requested=plural(activity.intros_requested, "intro pedida", "intros pedidas")
            + " a contactos puente",
            responses=plural(activity.intro_responses, "respuesta recibida", "respuestas recibidas")
            + f" ({round_half_up(rates.response_rate)}% de tasa de respuesta)",
            outbound_pending=plural(
                pending,
                "mensaje outbound sugerido sin ejecutar",
                "mensajes outbound sugeridos sin ejecutar",
            ) + f" de {activity.outbound_suggested} totales",
            wins=plural(activity.wins, "victoria", "victorias") + " esta semana",
            losses=plural(activity.losses, "pérdida registrada", "pérdidas registradas"),
        )

    # ============================================
    # INSIGHTS
    # ============================================

    def insight_candidates(self, activity: WeeklyActivity, rates: ActivityRates) -> List[str]:
        """At most one insight per dimension, in a fixed dimension order."""
        dimensions = (
            self._volume_insight(activity),
            self._response_insight(activity, rates),
            self._outbound_insight(activity, rates),
            self._conversion_insight(activity, rates),
            self._industry_insight(activity),
            self._balance_insight(activity),
        )
        return [insight for insight in dimensions if insight]

    def _volume_insight(self, activity: WeeklyActivity) -> Optional[str]:
        generated = activity.intros_generated
        if generated == 0:
            return "No se generaron intros esta semana. Es momento de reactivar tu pipeline de prospección."
        if generated >= self.HIGH_VOLUME:
            return (
                f"Excelente volumen: generaste {generated} intros esta semana, lo que indica "
                f"buena actividad de prospección."
            )
        if generated >= self.MODERATE_VOLUME:
            return f"Volumen moderado: {generated} intros generadas. Hay espacio para aumentar la actividad."
        return (
            f"Bajo volumen: solo {plural(generated, 'intro generada', 'intros generadas')}. "
            f"Considera aumentar tu actividad de prospección."
        )

    def _response_insight(self, activity: WeeklyActivity, rates: ActivityRates) -> Optional[str]:
        if activity.intros_requested == 0:
            return None

        rate = rates.response_rate
        shown = round_half_up(rate)
        if rate >= self.EXCEPTIONAL_RESPONSE:
            return (
                f"Tasa de respuesta excepcional: {shown}% de tus contactos puente respondieron, "
                f"lo que indica relaciones sólidas."
            )
        if rate >= self.GOOD_RESPONSE:
            return f"Tasa de respuesta buena: {shown}% de respuestas. Tus contactos puente están comprometidos."
        if rate >= self.MODERATE_RESPONSE:
            return (
                f"Tasa de respuesta moderada: {shown}%. Considera mejorar la calidad de tus "
                f"solicitudes de intro."
            )
        return (
            f"Tasa de respuesta baja: {shown}%. Puede ser que necesites fortalecer tus relaciones "
            f"o mejorar el timing de tus solicitudes."
        )

    def _outbound_insight(self, activity: WeeklyActivity, rates: ActivityRates) -> Optional[str]:
        if activity.outbound_suggested == 0:
            return None

        pending = rates.outbound_pending
        if pending == 0:
            return (
                f"Excelente ejecución: completaste todos los {activity.outbound_executed} "
                f"mensajes outbound sugeridos."
            )
        if rates.outbound_execution_rate < self.LOW_EXECUTION:
            return (
                f"Oportunidad perdida: tienes {pending} mensajes outbound sin ejecutar. El outbound "
                f"frío puede ser efectivo si lo ejecutas consistentemente."
            )
        if rates.outbound_execution_rate < self.PARTIAL_EXECUTION:
            return (
                f"Ejecución parcial: {pending} mensajes outbound pendientes. Completar estos puede "
                f"abrir nuevas oportunidades."
            )
        return None

    def _conversion_insight(self, activity: WeeklyActivity, rates: ActivityRates) -> Optional[str]:
        if activity.intro_responses == 0:
            return None

        rate = rates.conversion_rate
        shown = round_half_up(rate)
        if rate >= self.HIGH_CONVERSION:
            return (
                f"Alta tasa de conversión: {shown}% de las respuestas se convirtieron en victorias. "
                f"Tu enfoque está funcionando bien."
            )
        if rate >= self.MODERATE_CONVERSION:
            return f"Tasa de conversión moderada: {shown}%. Hay espacio para mejorar el seguimiento y cierre."
        return (
            f"Tasa de conversión baja: {shown}%. Considera revisar tu proceso de seguimiento "
            f"y cualificación."
        )

    def _industry_insight(self, activity: WeeklyActivity) -> Optional[str]:
        top = best_industry(activity.industries_performance)
        if top is None or top.conversion_rate <= self.STANDOUT_INDUSTRY_CONVERSION:
            return None
        return (
            f"Industria destacada: {top.industry} muestra {round_half_up(top.conversion_rate)}% "
            f"de conversión. Considera enfocarte más en este sector."
        )

    def _balance_insight(self, activity: WeeklyActivity) -> Optional[str]:
        wins, losses = activity.wins, activity.losses
        if wins == 0 and losses == 0:
            return None
        if wins > losses * 2:
            return f"Ratio positivo: {wins} victorias vs {losses} pérdidas. Estás en el camino correcto."
        if wins > losses:
            return f"Balance positivo: {wins} victorias vs {losses} pérdidas. Sigue así."
        if losses > wins:
            return (
                f"Atención: {losses} pérdidas vs {wins} victorias. Revisa tu proceso de "
                f"cualificación y seguimiento."
            )
        return None

    # ============================================
    # RECOMMENDED ACTIONS
    # ============================================

    def action_candidates(self, activity: WeeklyActivity, rates: ActivityRates) -> List[str]:
        dimensions = (
            self._volume_action(activity),
            self._engagement_action(activity, rates),
            self._focus_action(activity, rates),
        )
        return [action for action in dimensions if action]

    def _volume_action(self, activity: WeeklyActivity) -> str:
        if activity.intros_generated < self.MODERATE_VOLUME:
            return (
                "Aumenta tu actividad de prospección: apunta a generar al menos 5-10 intros por "
                "semana para mantener un pipeline saludable."
            )
        if activity.intros_generated < self.HIGH_VOLUME:
            return (
                "Mantén el momentum: estás en buen camino. Considera aumentar a 10+ intros "
                "semanales para acelerar el crecimiento."
            )
        return (
            "Excelente volumen. Ahora enfócate en mejorar la calidad: cualifica mejor tus "
            "oportunidades antes de pedir intros."
        )

    def _engagement_action(self, activity: WeeklyActivity, rates: ActivityRates) -> str:
        """Response quality first, then outbound backlog, then stalled deals."""
        if activity.intros_requested > 0 and rates.response_rate < self.GOOD_RESPONSE:
            return (
                "Mejora tus solicitudes de intro: personaliza más tus mensajes, explica claramente "
                "el valor para el contacto puente, y elige mejor el timing."
            )
        if rates.outbound_pending > self.OUTBOUND_BACKLOG:
            return (
                f"Ejecuta los {rates.outbound_pending} mensajes outbound pendientes: el outbound frío "
                f"puede ser efectivo si lo ejecutas consistentemente."
            )
        if activity.stalled_opportunities > 0:
            stalled = plural(activity.stalled_opportunities, "oportunidad estancada", "oportunidades estancadas")
            return (
                f"Retoma {stalled}: envía un follow-up a las que llevan más de una semana "
                f"sin actividad."
            )
        if activity.intros_requested == 0 and activity.outbound_suggested == 0:
            return (
                "Comienza a pedir intros o generar outbound: sin actividad no hay resultados. "
                "Identifica al menos 5 oportunidades esta semana."
            )
        return (
            "Sigue el ritmo: tu actividad es consistente. Enfócate en mejorar la calidad de tus "
            "interacciones y seguimientos."
        )

    def _focus_action(self, activity: WeeklyActivity, rates: ActivityRates) -> str:
        if activity.intro_responses > 0:
            if rates.conversion_rate < self.ACTION_CONVERSION:
                return (
                    "Mejora tu proceso de seguimiento: cualifica mejor las oportunidades, haz "
                    "follow-ups más efectivos, y cierra más conversaciones."
                )
            return (
                "Mantén tu proceso de seguimiento: está funcionando bien. Documenta qué está "
                "funcionando para replicarlo."
            )

        top = best_industry(activity.industries_performance)
        if top is not None:
            return (
                f"Enfócate en {top.industry}: esta industria muestra mejor performance. "
                f"Busca más oportunidades similares."
            )
        return (
            "Diversifica tu enfoque: prueba diferentes industrias y tipos de empresas para "
            "encontrar qué funciona mejor para ti."
        )


# Singleton instance
_advisor: Optional[WeeklyAdvisor] = None


def get_weekly_advisor() -> WeeklyAdvisor:
    """Get or create the weekly advisor singleton."""
    global _advisor
    if _advisor is None:
        _advisor = WeeklyAdvisor()
    return _advisor


def analyze_weekly_activity(activity: WeeklyActivity) -> WeeklyAdvisorResult:
    """Convenience function: build the weekly digest with the shared advisor."""
    return get_weekly_advisor().analyze(activity)
