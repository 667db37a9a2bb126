"""
Title Anonymization

Maps CRM job titles to seniority-preserving descriptors that reveal nothing
about the person or the company ("CFO" -> "a finance leader at the client").

TITLE_ANONYMIZER is evaluated top to bottom and the first match wins, so
specific titles must stay above the general ones they contain
("Senior Vice President" above "Vice President" above "President").
"""

import re
from typing import List, Optional, Pattern, Tuple

DEFAULT_CLIENT_LABEL = "the client"

TITLE_ANONYMIZER: List[Tuple[Pattern[str], str]] = [
    (
        re.compile(r"\b(CISO|Chief Information Security Officer)\b", re.IGNORECASE),
        "a security leader at {client}",
    ),
    (
        re.compile(
            r"\b(SVP|Senior Vice President|EVP|Executive Vice President)\b",
            re.IGNORECASE,
        ),
        "a senior leader at {client}",
    ),
    (
        re.compile(r"\b(VP|Vice President)\b", re.IGNORECASE),
        "a VP at {client}",
    ),
    (
        re.compile(
            r"\b(CEO|Chief Executive Officer|Co-Founder|Founder|President)\b",
            re.IGNORECASE,
        ),
        "a senior executive at {client}",
    ),
    (
        re.compile(r"\b(CFO|Chief Financial Officer)\b", re.IGNORECASE),
        "a finance leader at {client}",
    ),
    (
        re.compile(
            r"\b(CTO|Chief Technology Officer|CIO|Chief Information Officer)\b",
            re.IGNORECASE,
        ),
        "a technology leader at {client}",
    ),
    (
        re.compile(r"\b(CMO|Chief Marketing Officer)\b", re.IGNORECASE),
        "a marketing leader at {client}",
    ),
    (
        re.compile(r"\b(COO|Chief Operating Officer)\b", re.IGNORECASE),
        "an operations leader at {client}",
    ),
    (
        re.compile(r"\b(CRO|Chief Revenue Officer)\b", re.IGNORECASE),
        "a revenue leader at {client}",
    ),
    (
        re.compile(r"\b(Director)\b", re.IGNORECASE),
        "a director at {client}",
    ),
    (
        re.compile(r"\b(Head of)\b", re.IGNORECASE),
        "a department head at {client}",
    ),
    (
        re.compile(r"\b(Senior Manager|Manager)\b", re.IGNORECASE),
        "a manager at {client}",
    ),
    (
        re.compile(r"\b(Engineer|Developer|Architect)\b", re.IGNORECASE),
        "a technical team member at {client}",
    ),
]

GENERIC_TEAM_MEMBER = "a team member at {client}"


def anonymize_title(
    title: Optional[str], placeholder: str = DEFAULT_CLIENT_LABEL
) -> str:
    """
    Replace a job title with an anonymized descriptor.

    Args:
        title: CRM job title, may be None
        placeholder: How the client company is referred to

    Returns:
        Descriptor such as "a VP at the client"; the generic team-member
        phrase when no pattern matches
    """
    if title:
        for pattern, phrase in TITLE_ANONYMIZER:
            if pattern.search(title):
                return phrase.format(client=placeholder)
    return GENERIC_TEAM_MEMBER.format(client=placeholder)


def format_attribution(
    name: Optional[str],
    title: Optional[str],
    include_company_name: bool,
    company_name: Optional[str] = None,
) -> str:
    """
    Format a contact attribution for a story or landing page.

    Named mode (with company):   "Jeff Bezos, CEO, Amazon"
    Named mode (no company):     "Jeff Bezos, CEO"
    Anonymized mode:             "a senior executive at the client"
    """
    if include_company_name and name:
        parts = [name]
        if title:
            parts.append(title)
        if company_name:
            parts.append(company_name)
        return ", ".join(parts)
    return anonymize_title(title)


def format_inline_attribution(
    title: Optional[str],
    include_company_name: bool,
    company_name: Optional[str] = None,
) -> str:
    """
    Format a short attribution for inline quotes (no personal name).

    Named mode:      "CEO, Amazon"
    Anonymized mode: "a senior executive at the client"
    """
    if include_company_name and title:
        return f"{title}, {company_name}" if company_name else title
    return anonymize_title(title)
