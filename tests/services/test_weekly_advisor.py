"""
Tests for the weekly advisor digest.
"""
import random
import pytest
from introengine.models.activity import IndustryPerformance, WeeklyActivity
from introengine.services.weekly_advisor import (
    INSIGHT_FILLERS,
    ActivityRates,
    WeeklyAdvisor,
    analyze_weekly_activity,
    best_industry,
    take_exactly,
)


@pytest.fixture
def advisor():
    return WeeklyAdvisor()


class TestTakeExactly:

    def test_pads_with_positional_fillers(self):
        assert take_exactly(["a"], ["f1", "f2", "f3"]) == ["a", "f2", "f3"]

    def test_truncates(self):
        assert take_exactly(["a", "b", "c", "d"], ["f1", "f2", "f3"]) == ["a", "b", "c"]

    def test_only_fillers(self):
        assert take_exactly([], ["f1", "f2", "f3"]) == ["f1", "f2", "f3"]


class TestEmptyWeek:

    def test_exactly_three_of_each(self, advisor):
        result = advisor.analyze(WeeklyActivity())

        assert len(result.insights) == 3
        assert len(result.recommended_actions) == 3
        assert result.insights[0].startswith("No se generaron intros esta semana")
        assert result.insights[1:] == list(INSIGHT_FILLERS[1:])

    def test_summary_of_zero(self, advisor):
        summary = advisor.analyze(WeeklyActivity()).summary

        assert summary.intros_generated == "0 intros generadas esta semana"
        assert summary.responses == "0 respuestas recibidas (0% de tasa de respuesta)"
        assert summary.outbound_pending == "0 mensajes outbound sugeridos sin ejecutar de 0 totales"


class TestSummary:

    def test_singular_forms(self, advisor):
        activity = WeeklyActivity(intros_generated=1, intros_requested=1, intro_responses=1, wins=1, losses=1)
        summary = advisor.analyze(activity).summary

        assert summary.intros_generated == "1 intro generada esta semana"
        assert summary.intros_requested == "1 intro pedida a contactos puente"
        assert summary.responses == "1 respuesta recibida (100% de tasa de respuesta)"
        assert summary.wins == "1 victoria esta semana"
        assert summary.losses == "1 pérdida registrada"

    def test_pending_outbound_never_negative(self, advisor):
        activity = WeeklyActivity(outbound_suggested=2, outbound_executed=5)

        assert ActivityRates.from_activity(activity).outbound_pending == 0
        assert advisor.analyze(activity).summary.outbound_pending.startswith("0 mensajes")


class TestInsights:

    def test_busy_week(self, advisor):
        activity = WeeklyActivity(
            intros_generated=12,
            intros_requested=10,
            intro_responses=6,
            outbound_suggested=4,
            outbound_executed=4,
            wins=3,
            losses=1,
        )

        insights = advisor.analyze(activity).insights

        assert insights[0].startswith("Excelente volumen: generaste 12 intros")
        assert insights[1].startswith("Tasa de respuesta excepcional: 60%")
        assert insights[2].startswith("Excelente ejecución")

    def test_low_response_rate(self, advisor):
        activity = WeeklyActivity(intros_generated=6, intros_requested=10, intro_responses=1)

        insights = advisor.analyze(activity).insights

        assert insights[0].startswith("Volumen moderado: 6 intros")
        assert insights[1].startswith("Tasa de respuesta baja: 10%")

    def test_standout_industry(self, advisor):
        activity = WeeklyActivity(
            intros_generated=3,
            industries_performance=[
                IndustryPerformance(industry="Retail", opportunities=4, wins=2, conversion_rate=50),
                IndustryPerformance(industry="Banca", opportunities=2, conversion_rate=0),
            ],
        )

        insights = advisor.analyze(activity).insights

        assert any(i.startswith("Industria destacada: Retail muestra 50%") for i in insights)

    def test_losses_outnumber_wins(self, advisor):
        insights = advisor.analyze(WeeklyActivity(intros_generated=2, wins=1, losses=3)).insights

        assert any(i.startswith("Atención: 3 pérdidas vs 1 victorias") for i in insights)


class TestActions:

    def test_outbound_backlog(self, advisor):
        activity = WeeklyActivity(intros_generated=7, outbound_suggested=10, outbound_executed=2)

        actions = advisor.analyze(activity).recommended_actions

        assert actions[0].startswith("Mantén el momentum")
        assert actions[1].startswith("Ejecuta los 8 mensajes outbound pendientes")

    def test_stalled_opportunities(self, advisor):
        activity = WeeklyActivity(
            intros_generated=7, intros_requested=4, intro_responses=2, stalled_opportunities=3
        )

        actions = advisor.analyze(activity).recommended_actions

        assert actions[1].startswith("Retoma 3 oportunidades estancadas")

    def test_low_conversion(self, advisor):
        activity = WeeklyActivity(intros_generated=10, intros_requested=5, intro_responses=5, wins=0)

        assert advisor.analyze(activity).recommended_actions[2].startswith("Mejora tu proceso de seguimiento")

    def test_focus_on_best_industry(self, advisor):
        activity = WeeklyActivity(industries_performance=[
            IndustryPerformance(industry="Salud", conversion_rate=10),
            IndustryPerformance(industry="Retail", conversion_rate=10),
        ])

        actions = advisor.analyze(activity).recommended_actions

        assert actions[2].startswith("Enfócate en Salud")

    def test_diversify_without_data(self, advisor):
        assert advisor.analyze(WeeklyActivity()).recommended_actions[2].startswith("Diversifica")


class TestBestIndustry:

    def test_input_is_not_reordered(self):
        industries = [
            IndustryPerformance(industry="A", conversion_rate=5),
            IndustryPerformance(industry="B", conversion_rate=40),
        ]

        assert best_industry(industries).industry == "B"
        assert [i.industry for i in industries] == ["A", "B"]

    def test_empty(self):
        assert best_industry([]) is None


class TestAlwaysThree:

    def test_huge_counters(self, advisor):
        result = advisor.analyze(WeeklyActivity(intros_requested=1, intro_responses=10**30, wins=10**35))

        assert len(result.insights) == 3
        assert len(result.recommended_actions) == 3
        assert f"({10**32}% de tasa de respuesta)" in result.summary.responses

    def test_random_weeks(self):
        rng = random.Random(3)

        for _ in range(300):
            activity = WeeklyActivity(
                intros_generated=rng.randint(0, 20),
                intros_requested=rng.randint(0, 15),
                intro_responses=rng.randint(0, 15),
                outbound_suggested=rng.randint(0, 15),
                outbound_executed=rng.randint(0, 15),
                wins=rng.randint(0, 5),
                losses=rng.randint(0, 5),
                stalled_opportunities=rng.randint(0, 4),
                industries_performance=[
                    IndustryPerformance(industry=name, conversion_rate=rng.randint(0, 100))
                    for name in rng.sample(["Retail", "Salud", "Banca"], k=rng.randint(0, 3))
                ],
            )

            result = analyze_weekly_activity(activity)

            assert len(result.insights) == 3
            assert len(result.recommended_actions) == 3
            assert all(result.insights) and all(result.recommended_actions)
            assert len(set(result.recommended_actions)) == 3
