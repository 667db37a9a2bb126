"""
Term Catalog Builder

Derives every string considered equivalent to a client's identity from the
Account record: name variations, domains and org-level custom mappings.

The catalog is rebuilt on every call and never cached, so a domain alias
added a minute ago is honoured by the very next publish attempt.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional

from storyguard.models.account import Account
from storyguard.scrubbing.normalization import normalize_company_name, strip_corporate_suffix
from storyguard.utils.helpers import MappingInput, dedupe, to_mapping_pairs

logger = logging.getLogger(__name__)

MIN_VARIATION_LENGTH = 4
MIN_ACRONYM_LENGTH = 3
MIN_CUSTOM_LENGTH = 2
MIN_DOMAIN_LENGTH = 3


def is_acronym(term: str) -> bool:
    """Short all-caps terms are acronyms: "ACE" must not hit "ace"."""
    return len(term) <= 4 and term.isupper()


class TermKind(str, Enum):
    """Where a scrub term came from."""

    CUSTOM = "custom"  # Org-level mapping, explicit admin opt-in
    NAME = "name"  # Auto-generated company-name variation
    DOMAIN = "domain"  # Primary domain or alias


@dataclass(frozen=True)
class ScrubTerm:
    """
    A literal string to scrub and what to put in its place.

    replacement is None for auto-generated terms, meaning "use the
    placeholder configured for this call".
    """

    pattern: str
    replacement: Optional[str]
    label: str
    kind: TermKind

    @property
    def case_sensitive(self) -> bool:
        return is_acronym(self.pattern)

    def resolve(self, placeholder: str) -> str:
        return placeholder if self.replacement is None else self.replacement


@dataclass
class TermCatalog:
    """Scrub terms split by pass; each list is ordered longest-first."""

    domain_terms: List[ScrubTerm] = field(default_factory=list)
    name_terms: List[ScrubTerm] = field(default_factory=list)

    def __iter__(self) -> Iterator[ScrubTerm]:
        yield from self.domain_terms
        yield from self.name_terms

    def __len__(self) -> int:
        return len(self.domain_terms) + len(self.name_terms)

    @property
    def name_patterns(self) -> List[str]:
        return [term.pattern for term in self.name_terms]


def _longest_first(terms: List[ScrubTerm]) -> List[ScrubTerm]:
    # sorted() is stable: at equal length custom mappings stay ahead
    return sorted(terms, key=lambda term: len(term.pattern), reverse=True)


class TermCatalogBuilder:
    """Builds the ordered term catalog for one Account."""

    def build(
        self, account: Account, custom_mappings: MappingInput = None
    ) -> TermCatalog:
        """
        Build the scrub catalog for an account.

        Custom mappings come first and win over an auto-generated variation
        with the same spelling (case-insensitive). Within each pass terms
        are ordered longest-first so a short term never clobbers the match
        window of a longer one.

        Args:
            account: Account graph supplied by entity resolution
            custom_mappings: Ordered (pattern, replacement) pairs from org
                settings; a dict is taken in insertion order

        Returns:
            TermCatalog with separate domain and name passes
        """
        name_terms: List[ScrubTerm] = []
        seen = set()

        for pattern, replacement in to_mapping_pairs(custom_mappings):
            pattern = pattern.strip()
            if len(pattern) < MIN_CUSTOM_LENGTH or pattern.lower() in seen:
                continue
            seen.add(pattern.lower())
            name_terms.append(
                ScrubTerm(
                    pattern=pattern,
                    replacement=replacement,
                    label=pattern,
                    kind=TermKind.CUSTOM,
                )
            )

        for variation in self.name_variations(account.name, account.normalized_name):
            if variation.lower() in seen:
                continue
            seen.add(variation.lower())
            name_terms.append(
                ScrubTerm(
                    pattern=variation,
                    replacement=None,
                    label=variation,
                    kind=TermKind.NAME,
                )
            )

        domain_terms = [
            ScrubTerm(pattern=domain, replacement=None, label=domain, kind=TermKind.DOMAIN)
            for domain in self.collect_domains(account)
        ]

        catalog = TermCatalog(
            domain_terms=_longest_first(domain_terms),
            name_terms=_longest_first(name_terms),
        )
        logger.debug(
            f"Built term catalog for account {account.id}: "
            f"{len(catalog.domain_terms)} domain terms, {len(catalog.name_terms)} name terms"
        )
        return catalog

    def name_variations(self, name: Optional[str], normalized_name: str = "") -> List[str]:
        """
        Generate spellings of a company name worth scrubbing.

        - verbatim name
        - normalized name ("Acme Corp" -> "acme") and its title-cased form
        - name without its suffix, punctuation kept ("Coca-Cola Company" -> "Coca-Cola")
        - first two words of a multi-word name
        - initials acronym, only for names of 3+ words

        Variations shorter than 4 characters are dropped, except the
        verbatim name and the acronym which need 3.
        """
        name = (name or "").strip()
        if not name:
            return []

        variations = []
        if len(name) >= MIN_ACRONYM_LENGTH:
            variations.append(name)

        normalized = normalize_company_name(name)
        title_case = " ".join(word[:1].upper() + word[1:] for word in normalized.split(" "))
        candidates = [
            normalized,
            (normalized_name or "").strip(),
            strip_corporate_suffix(name),
            title_case,
        ]

        words = name.split()
        if len(words) >= 2:
            candidates.append(" ".join(words[:2]))

        variations.extend(c for c in candidates if len(c) >= MIN_VARIATION_LENGTH)

        if len(words) >= 3:
            acronym = "".join(word[0] for word in words if word[0].isalnum()).upper()
            if len(acronym) >= MIN_ACRONYM_LENGTH:
                variations.append(acronym)

        # Case-insensitive dedupe; a broader case-insensitive spelling
        # replaces an acronym-style one in place ("ACME" -> "acme")
        unique = {}
        for variation in variations:
            key = variation.lower()
            existing = unique.get(key)
            if existing is None or (is_acronym(existing) and not is_acronym(variation)):
                unique[key] = variation

        return [v for v in unique.values() if len(v) >= 2]

    def collect_domains(self, account: Account) -> List[str]:
        """Primary domain followed by every alias, deduplicated."""
        domains = []
        if account.domain:
            domains.append(account.domain.strip())
        domains.extend(alias.strip() for alias in account.domain_aliases if alias)
        return [d for d in dedupe(domains, case_sensitive=False) if len(d) >= MIN_DOMAIN_LENGTH]


def build_term_catalog(account: Account, custom_mappings: MappingInput = None) -> TermCatalog:
    """Build a fresh term catalog for an account."""
    return TermCatalogBuilder().build(account, custom_mappings)
