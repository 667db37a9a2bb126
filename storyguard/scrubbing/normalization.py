"""
Company Name Normalization

Canonical, suffix-free form of a company name ("Acme Corp." -> "acme").
"""

import re

CORPORATE_SUFFIXES = (
    "inc",
    "incorporated",
    "corp",
    "corporation",
    "llc",
    "ltd",
    "limited",
    "co",
    "company",
    "group",
    "holdings",
    "plc",
    "gmbh",
    "sa",
    "ag",
)

# Longest alternatives first so "corporation" is not cut short at "corp"
_SUFFIX_ALTERNATION = "|".join(
    sorted(CORPORATE_SUFFIXES, key=len, reverse=True)
)

_SUFFIX_RE = re.compile(rf"\b(?:{_SUFFIX_ALTERNATION})\b\.?", re.IGNORECASE)
_TRAILING_SUFFIXES_RE = re.compile(
    rf"(?:[\s,]+(?:{_SUFFIX_ALTERNATION})\.?)+\s*$", re.IGNORECASE
)
_SEPARATORS_RE = re.compile(r"[.,\-()]")
_WHITESPACE_RE = re.compile(r"\s+")

# Written suffixes: "Corp" or "CORP", never the plain word "corp"
_SPELLED_SUFFIXES = {"gmbh": ("GmbH",)}
_CASED_SUFFIX_ALTERNATION = "|".join(
    spelling
    for suffix in sorted(CORPORATE_SUFFIXES, key=len, reverse=True)
    for spelling in (suffix.capitalize(), suffix.upper()) + _SPELLED_SUFFIXES.get(suffix, ())
)

# Optional trailing suffix consumed together with a company-name match.
# Case-sensitive even inside an IGNORECASE pattern, so "Acme limited churn"
# keeps its verb.
SUFFIX_TAIL_PATTERN = rf"(?:\s+(?-i:{_CASED_SUFFIX_ALTERNATION})(?![\w-]))?"


def normalize_company_name(name: str) -> str:
    """
    Normalize a company name for matching.

    Lower-cases, drops corporate suffixes (Inc, Corp, LLC, GmbH, ...),
    turns separators into spaces and collapses whitespace.

    Examples:
        "Acme Corp." -> "acme"
        "Globex Holdings, Inc" -> "globex"
        "Stark-Wayne Ltd" -> "stark wayne"
    """
    if not name:
        return ""
    lowered = name.lower()
    lowered = _SUFFIX_RE.sub("", lowered)
    lowered = _SEPARATORS_RE.sub(" ", lowered)
    return _WHITESPACE_RE.sub(" ", lowered).strip()


def strip_corporate_suffix(name: str) -> str:
    """
    Drop trailing corporate suffixes but keep case and punctuation.

    Examples:
        "Coca-Cola Company" -> "Coca-Cola"
        "Globex Holdings, Inc." -> "Globex"
        "Group" -> "Group"
    """
    if not name:
        return ""
    return _TRAILING_SUFFIXES_RE.sub("", name.strip()).strip()
