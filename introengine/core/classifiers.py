"""
Table-Driven Classifiers

Free-text fields (role titles, size buckets, industries, seniority) are
reduced to closed vocabularies here. Each classifier is a pure function over
an explicit keyword table, so extending a rule means editing a table.
"""
import re
from typing import Dict, Optional, Tuple
from introengine.models.company import SizeBucket
from introengine.models.outreach import RoleType
from introengine.utils.text_normalizer import normalize_name

_TOKEN_PATTERN = re.compile(r"\w+")


def _keyword_hit(text: str, tokens: set, keyword: str) -> bool:
    """Phrases match as substrings, single words only as whole tokens."""
    if " " in keyword:
        return keyword in text
    return keyword in tokens


# ============================================
# ROLE CLASSIFICATION
# ============================================

# Evaluated in order: "Director General de Operaciones" is a CEO, not Ops
ROLE_KEYWORDS: Dict[RoleType, Tuple[str, ...]] = {
    RoleType.CEO: (
        "ceo", "chief executive", "director general", "directora general", "managing director",
        "fundador", "fundadora", "founder", "cofounder", "owner",
        "propietario", "propietaria", "dueno", "duena", "gerente general",
    ),
    RoleType.HR: (
        "rrhh", "hr", "recursos humanos", "human resources", "people",
        "talent", "talento", "chro", "personas",
    ),
    RoleType.OPERATIONS: (
        "operaciones", "operations", "operating", "coo", "ops", "jefe de operaciones",
    ),
    RoleType.FINANCE: (
        "cfo", "finanzas", "finance", "financial", "financiero", "financiera",
        "contador", "contadora", "contabilidad", "accounting", "controller",
    ),
}


def classify_role(title: Optional[str], seniority: Optional[str] = None) -> RoleType:
    """
    Map a free-text role title onto a RoleType.

    A title with no functional keyword falls back to CEO when the
    seniority is C-level: the copy then addresses a top decision-maker.

    >>> classify_role("Responsable de RRHH")
    <RoleType.HR: 'hr'>
    >>> classify_role("Head of Sales")
    <RoleType.OTHER: 'other'>
    """
    text = normalize_name(title)
    tokens = set(_TOKEN_PATTERN.findall(text))
    for role_type, keywords in ROLE_KEYWORDS.items():
        if any(_keyword_hit(text, tokens, kw) for kw in keywords):
            return role_type
    if is_c_level(seniority):
        return RoleType.CEO
    return RoleType.OTHER


# ============================================
# SENIORITY
# ============================================

C_LEVEL_SENIORITIES = ("c-level", "c level", "clevel", "c-suite", "c suite", "executive")
SENIOR_SENIORITIES = ("director", "directora", "senior", "vp", "head")


def is_c_level(seniority: Optional[str]) -> bool:
    text = normalize_name(seniority)
    return any(term in text for term in C_LEVEL_SENIORITIES)


def is_senior(role_title: Optional[str], seniority: Optional[str]) -> bool:
    """Director-level or senior, judged from the title or the seniority tier."""
    tokens = set(_TOKEN_PATTERN.findall(normalize_name(seniority)))
    tokens |= set(_TOKEN_PATTERN.findall(normalize_name(role_title))) & {"director", "directora"}
    return bool(tokens & set(SENIOR_SENIORITIES))


# ============================================
# COMPANY SIZE
# ============================================

SIZE_BUCKET_ALIASES: Dict[str, SizeBucket] = {
    "startup": SizeBucket.STARTUP,
    "micro": SizeBucket.STARTUP,
    "microempresa": SizeBucket.STARTUP,
    "small": SizeBucket.SMALL,
    "pequena": SizeBucket.SMALL,
    "pyme": SizeBucket.SMALL,
    "smb": SizeBucket.SMALL,
    "medium": SizeBucket.MEDIUM,
    "mediana": SizeBucket.MEDIUM,
    "mid": SizeBucket.MEDIUM,
    "large": SizeBucket.LARGE,
    "grande": SizeBucket.LARGE,
    "enterprise": SizeBucket.ENTERPRISE,
    "corporativo": SizeBucket.ENTERPRISE,
    "corporate": SizeBucket.ENTERPRISE,
}

# Upper headcount bound -> bucket, first match wins
HEADCOUNT_BUCKETS: Tuple[Tuple[int, SizeBucket], ...] = (
    (50, SizeBucket.SMALL),
    (200, SizeBucket.MEDIUM),
    (1000, SizeBucket.LARGE),
)

DEFAULT_SIZE_BUCKET = SizeBucket.SMALL

_RANGE_PATTERN = re.compile(r"(\d[\d.,]*)\s*(?:-|to|a)\s*(\d[\d.,]*)")
_OPEN_RANGE_PATTERN = re.compile(r"(\d[\d.,]*)\s*\+")
_NUMBER_PATTERN = re.compile(r"\d[\d.,]*")


def _to_int(raw: str) -> int:
    return int(re.sub(r"[.,]", "", raw))


def _bucket_for_headcount(headcount: int) -> SizeBucket:
    for upper, bucket in HEADCOUNT_BUCKETS:
        if headcount <= upper:
            return bucket
    return SizeBucket.ENTERPRISE


def normalize_size_bucket(raw: Optional[str]) -> SizeBucket:
    """
    Reduce an open size vocabulary to a SizeBucket.

    Accepts words in English/Spanish ("Mediana", "enterprise") and
    headcount ranges ("1-10", "51-200", "1000+"). Unknown input is SMALL.
    """
    text = normalize_name(raw)
    if not text:
        return DEFAULT_SIZE_BUCKET

    for token in _TOKEN_PATTERN.findall(text):
        if token in SIZE_BUCKET_ALIASES:
            return SIZE_BUCKET_ALIASES[token]

    if match := _RANGE_PATTERN.search(text):
        return _bucket_for_headcount(_to_int(match.group(2)))

    if match := _OPEN_RANGE_PATTERN.search(text):
        lower = _to_int(match.group(1))
        # "200+" is at least large, "1000+" enterprise
        return _bucket_for_headcount(lower + 1)

    if match := _NUMBER_PATTERN.search(text):
        return _bucket_for_headcount(_to_int(match.group(0)))

    return DEFAULT_SIZE_BUCKET


# ============================================
# INDUSTRY FIT
# ============================================

HIGH_FIT = 20
MEDIUM_FIT = 10
LOW_FIT = -15

# keyword -> adjustment. When several keywords match, the highest wins,
# so "servicios financieros" counts as services, not finance.
INDUSTRY_FIT_KEYWORDS: Dict[str, int] = {
    **dict.fromkeys((
        "retail", "comercio", "tienda", "restaurante", "restaurant",
        "hospitalidad", "hospitality", "hotel", "turismo", "tourism",
        "servicios", "atencion al cliente", "manufactura", "manufacturing",
        "produccion", "fabrica", "logistica", "logistics", "transporte",
        "transport", "distribucion", "distribution", "salud", "health",
        "clinica", "clinic", "hospital", "educacion", "education",
        "educativo", "escuela", "school", "construccion", "construction",
        "obra", "inmobiliaria", "real estate",
    ), HIGH_FIT),
    **dict.fromkeys((
        "technology", "tech", "software", "saas", "consultoria", "consulting",
        "asesoria", "marketing", "publicidad", "advertising", "comunicacion",
        "finanzas", "finance", "contabilidad", "accounting",
    ), MEDIUM_FIT),
    **dict.fromkeys((
        "banca", "banking", "bank", "financiera", "gobierno", "government",
        "publico", "public sector", "estatal",
    ), LOW_FIT),
}


def industry_fit_adjustment(industry: Optional[str]) -> int:
    """Industry contribution to industry_fit_score (0 when nothing matches)."""
    text = normalize_name(industry)
    if not text:
        return 0
    matched = [weight for keyword, weight in INDUSTRY_FIT_KEYWORDS.items() if keyword in text]
    return max(matched) if matched else 0
