import pytest
import datetime as dt
from introengine.models.company import BuyingSignal, Company, SignalStrength, SignalType
from introengine.models.contact import Contact, TargetContact
from introengine.utils.metrics import metrics


@pytest.fixture(autouse=True)
def reset_metrics():
    """Every test starts from empty counters."""
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def retail_company():
    """Small retail company: the best possible industry fit."""
    return Company(id="c1", name="Tiendas Sol", industry="Retail", size_bucket="1-10", domain="tiendassol.com")


@pytest.fixture
def bank_company():
    return Company(id="c2", name="Banco Central", industry="Banca", size_bucket="enterprise")


@pytest.fixture
def ceo_target():
    """Decision-maker at retail_company."""
    return TargetContact(
        id="t1",
        full_name="Laura Gómez",
        role_title="CEO",
        seniority="c-level",
        company_id="c1",
    )


@pytest.fixture
def hr_bridge():
    """A well-connected HR contact with no relation to the target."""
    return Contact(
        id="u2",
        full_name="Marta Ruiz",
        role_title="Responsable de RRHH",
        seniority="senior",
        connections=[f"x{i}" for i in range(10)],
    )


@pytest.fixture
def strong_signals():
    return [
        BuyingSignal(type=SignalType.HR_SHORTAGE, strength=SignalStrength.HIGH),
        BuyingSignal(type=SignalType.HIRING, strength=SignalStrength.MEDIUM),
    ]


@pytest.fixture
def now():
    return dt.datetime(2026, 3, 16, 12, 0, tzinfo=dt.UTC)
