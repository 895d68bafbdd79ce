"""
Name & Company Normalization

Comparison helpers used by the relationship router and the classifiers.
Everything is case-folded and accent-stripped, so "José Pérez" and
"jose perez" compare equal, and company names additionally lose their
corporate suffixes ("Acme Corp." == "ACME").
"""
import re
import unicodedata
from typing import Iterable, Optional

# Corporate suffixes removed before comparing company names
CORPORATE_SUFFIXES = ("inc", "llc", "ltd", "corp", "corporation", "company", "co")

_SUFFIX_PATTERN = re.compile(r"\b(?:" + "|".join(CORPORATE_SUFFIXES) + r")\b")
_PUNCTUATION_PATTERN = re.compile(r"[^\w\s]")
_WHITESPACE_PATTERN = re.compile(r"\s+")

# Ignored by the shared-token rule: "Director de Ventas" and "Jefe de RRHH" share nothing
STOPWORDS = frozenset({"de", "del", "la", "el", "los", "las", "y", "e", "en", "of", "the", "and", "for"})


def strip_accents(text: str) -> str:
    """Remove combining diacritical marks ("Pequeña" -> "Pequena")."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def normalize_name(name: Optional[str]) -> str:
    """Case-fold, strip accents and collapse whitespace."""
    if not name:
        return ""
    folded = strip_accents(name.casefold())
    return _WHITESPACE_PATTERN.sub(" ", folded).strip()


def normalize_company_name(name: Optional[str]) -> str:
    """normalize_name plus punctuation and corporate-suffix removal."""
    normalized = _PUNCTUATION_PATTERN.sub(" ", normalize_name(name))
    normalized = _SUFFIX_PATTERN.sub(" ", normalized)
    return _WHITESPACE_PATTERN.sub(" ", normalized).strip()


def _similarity(n1: str, n2: str) -> float:
    if not n1 or not n2:
        return 0.0

    if n1 == n2:
        return 1.0

    if n1 in n2 or n2 in n1:
        return 0.8

    if (set(n1.split()) & set(n2.split())) - STOPWORDS:
        return 0.6

    return 0.0


def name_similarity(name1: Optional[str], name2: Optional[str]) -> float:
    """
    Similarity between two person names or role titles.

    Returns:
        1.0 exact match, 0.8 containment, 0.6 shared token, 0.0 otherwise
    """
    return _similarity(normalize_name(name1), normalize_name(name2))


def company_similarity(name1: Optional[str], name2: Optional[str]) -> float:
    """Same scale as name_similarity, on suffix-stripped company names."""
    return _similarity(normalize_company_name(name1), normalize_company_name(name2))


def same_company(company1: Optional[str], company2: Optional[str]) -> bool:
    """
    Exact match after company normalization.

    Containment is deliberately not enough here: history lists often hold
    company ids, and "c1" must not match "c10".
    """
    n1 = normalize_company_name(company1)
    return bool(n1) and n1 == normalize_company_name(company2)


def shared_companies(first: Iterable[str], second: Iterable[str]) -> list[str]:
    """Entries of `first` that also appear (normalized) in `second`, in order."""
    others = {normalize_company_name(c) for c in second} - {""}
    return [c for c in first if normalize_company_name(c) in others]


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().casefold()


def normalize_domain(domain: Optional[str]) -> str:
    """
    Reduce a domain or website URL to its bare host.

    "https://www.Acme.com/about" -> "acme.com"
    """
    if not domain:
        return ""
    host = domain.strip().casefold()
    host = re.sub(r"^[a-z][a-z0-9+.-]*://", "", host)
    host = host.split("/", 1)[0].split(":", 1)[0]
    if host.startswith("www."):
        host = host[4:]
    return host


def mentions(text: Optional[str], needle: Optional[str]) -> bool:
    """Accent/case-insensitive substring check used on interaction logs."""
    n = normalize_name(needle)
    return bool(n) and n in normalize_name(text)


def mentions_token(text: Optional[str], needle: Optional[str]) -> bool:
    """Like mentions(), but the needle must stand alone: "c1" is not in "c10"."""
    n = normalize_name(needle)
    if not n:
        return False
    return re.search(r"(?<!\w)" + re.escape(n) + r"(?!\w)", normalize_name(text)) is not None
