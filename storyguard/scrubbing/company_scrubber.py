"""
Company Name Scrubber

Removes all traces of the client's company name AND contact identities
from landing page content before it's published publicly.

Strategy (each step works on the output of the previous one):
  1. Replace "Name, Title" / "Name (Title)" attributions as a unit
  2. Replace contact emails, then every domain and domain alias, with the
     fixed domain placeholder
  3. Replace company-name variations and custom mappings, longest first
  4. Replace contact names that appeared without their title

Every inserted phrase is held as an opaque token until all steps are done,
so no step rewrites the output of another.

Domains go before names because the name is usually a substring of the
domain ("Acme" in "acme.com").

Quote Attribution Format:
  Original:  "We saved 40%" — Jeff Bezos, CEO
  Scrubbed:  "We saved 40%" — a senior executive at the client
"""

import re
import logging
from typing import Callable, Dict, Iterable, List, Optional, Pattern, Tuple

from storyguard.models.account import Account
from storyguard.models.content import ScrubConfig, ScrubResult
from storyguard.scrubbing.contact_scrubber import ContactIdentityScrubber, literal_pattern
from storyguard.scrubbing.normalization import SUFFIX_TAIL_PATTERN
from storyguard.scrubbing.term_catalog import (
    ScrubTerm,
    TermCatalog,
    TermCatalogBuilder,
    TermKind,
)
from storyguard.scrubbing.titles import DEFAULT_CLIENT_LABEL
from storyguard.utils.helpers import MappingInput, dedupe

logger = logging.getLogger(__name__)

# Possessives ("Acme's") and hyphen compounds ("Acme-powered") go with the match
INFLECTION_TAIL_PATTERN = r"(?:['’]s|-\w+)?"


def compile_name_pattern(
    term: str, case_sensitive: bool = False, absorb_suffix: bool = False
) -> Pattern[str]:
    """
    Compile the word-boundary regex used for company-name terms.

    Boundaries are lookarounds on word characters rather than \\b so that
    terms ending in punctuation ("Acme Inc.") still match before a space.

    Args:
        term: Literal term
        case_sensitive: Match exact case only (acronyms)
        absorb_suffix: Also consume a following corporate suffix
            ("Acme Corporation" for the term "Acme")
    """
    suffix = SUFFIX_TAIL_PATTERN if absorb_suffix else ""
    flags = 0 if case_sensitive else re.IGNORECASE
    return re.compile(
        rf"(?<!\w){literal_pattern(term)}{suffix}{INFLECTION_TAIL_PATTERN}(?!\w)",
        flags,
    )


def compile_domain_pattern(domain: str) -> Pattern[str]:
    """Domains are matched as plain case-insensitive substrings."""
    return re.compile(re.escape(domain), re.IGNORECASE)


class PlaceholderGuard:
    """
    Stands in opaque tokens for inserted text until every pass has run.

    Later passes can then never match inside a placeholder an earlier pass
    produced, nor inside one that was already present in the input
    ("domain" in "[client-domain]"). Tokens are built from private-use
    characters, which are neither word characters nor part of any term.
    """

    _MARK = "\ue000"
    _FIRST_INDEX = 0xE001

    def __init__(self):
        self._tokens: Dict[str, str] = {}

    def protect(self, replacement: str) -> str:
        token = self._tokens.get(replacement)
        if token is None:
            token = f"{self._MARK}{chr(self._FIRST_INDEX + len(self._tokens))}{self._MARK}"
            self._tokens[replacement] = token
        return token

    def shield(self, text: str, placeholders: Iterable[str]) -> str:
        """Hide placeholders already in the text; not counted as replacements."""
        for placeholder in sorted(set(p for p in placeholders if p), key=len, reverse=True):
            text = text.replace(placeholder, self.protect(placeholder))
        return text

    def restore(self, text: str) -> str:
        for replacement, token in self._tokens.items():
            text = text.replace(token, replacement)
        return text


class CompanyScrubber:
    """
    Company and contact identity scrubber.

    Pure transformation: nothing is loaded or stored here. The caller hands
    in the Account graph and the org's custom mappings on every call.
    """

    def __init__(self, catalog_builder: Optional[TermCatalogBuilder] = None):
        self.catalog_builder = catalog_builder or TermCatalogBuilder()

    def scrub_for_account(
        self,
        account: Account,
        text: Optional[str],
        custom_mappings: MappingInput = None,
        config: Optional[ScrubConfig] = None,
    ) -> ScrubResult:
        """
        Scrub all company-identifying information from the given text.

        Args:
            account: Account graph with domains, aliases and contacts
            text: Text to scrub
            custom_mappings: Ordered (pattern, replacement) pairs from org settings
            config: Placeholders and skip flag; defaults when omitted

        Returns:
            ScrubResult with the scrubbed text, the total number of
            replacements across all steps and the deduplicated labels
        """
        config = config or ScrubConfig()
        text = text or ""

        if config.skip_scrub or not text:
            return ScrubResult(scrubbed_text=text, replacements_made=0, terms_replaced=[])

        catalog = self.catalog_builder.build(account, custom_mappings)
        guard = PlaceholderGuard()
        contact_scrubber = ContactIdentityScrubber(config.placeholder, protect=guard.protect)

        scrubbed = guard.shield(text, [config.domain_placeholder, config.placeholder])
        count = 0
        replaced: List[str] = []

        # Step 1: "Name, Title" attributions
        attribution = contact_scrubber.scrub_attributions(
            scrubbed, account.contacts, catalog.name_patterns
        )
        scrubbed = attribution.scrubbed_text
        count += attribution.replacements_made
        replaced.extend(attribution.terms_replaced)

        # Step 2: contact emails as a whole, then domains
        emails = contact_scrubber.scrub_emails(
            scrubbed, account.contacts, config.domain_placeholder
        )
        scrubbed = emails.scrubbed_text
        count += emails.replacements_made
        replaced.extend(emails.terms_replaced)

        scrubbed, hits, labels = self._scrub_domains(
            scrubbed, catalog.domain_terms, guard.protect(config.domain_placeholder)
        )
        count += hits
        replaced.extend(labels)

        # Step 3: company name, variations and custom mappings
        scrubbed, hits, labels = self._scrub_names(
            scrubbed, catalog.name_terms, config.placeholder, guard.protect
        )
        count += hits
        replaced.extend(labels)

        # Step 4: bare contact names
        bare = contact_scrubber.scrub_bare_names(scrubbed, account.contacts)
        scrubbed = bare.scrubbed_text
        count += bare.replacements_made
        replaced.extend(bare.terms_replaced)

        scrubbed = guard.restore(scrubbed)

        logger.debug(
            f"Scrubbed text for account {account.id}: {count} replacement(s), "
            f"{len(catalog)} catalog term(s)"
        )

        return ScrubResult(
            scrubbed_text=scrubbed,
            replacements_made=count,
            terms_replaced=dedupe(replaced),
        )

    def scrub_with_terms(
        self,
        text: str,
        company_names: Iterable[str],
        placeholder: str = DEFAULT_CLIENT_LABEL,
    ) -> ScrubResult:
        """
        Quick scrub for previews: no Account, just a list of names.

        Names shorter than 2 characters are ignored; the rest are applied
        longest-first, case-insensitively, with word boundaries.
        """
        names = sorted(
            (name for name in company_names if name and len(name.strip()) >= 2),
            key=len,
            reverse=True,
        )
        terms = [
            ScrubTerm(pattern=name.strip(), replacement=None, label=name, kind=TermKind.CUSTOM)
            for name in names
        ]

        guard = PlaceholderGuard()
        protected = guard.protect(placeholder)
        scrubbed = guard.shield(text or "", [placeholder])
        count = 0
        replaced: List[str] = []
        for term in terms:
            scrubbed, hits = compile_name_pattern(term.pattern).subn(
                lambda _match: protected, scrubbed
            )
            if hits:
                count += hits
                replaced.append(term.label)
        scrubbed = guard.restore(scrubbed)

        return ScrubResult(
            scrubbed_text=scrubbed,
            replacements_made=count,
            terms_replaced=dedupe(replaced),
        )

    def preview_catalog(
        self, account: Account, custom_mappings: MappingInput = None
    ) -> TermCatalog:
        """Expose the catalog that scrub_for_account would use, for audit UIs."""
        return self.catalog_builder.build(account, custom_mappings)

    # ─── Private ──────────────────────────────────────────────────────

    def _scrub_domains(
        self, text: str, terms: List[ScrubTerm], domain_placeholder: str
    ) -> Tuple[str, int, List[str]]:
        count = 0
        replaced = []
        for term in terms:
            text, hits = compile_domain_pattern(term.pattern).subn(
                lambda _match: domain_placeholder, text
            )
            if hits:
                count += hits
                replaced.append(term.label)
        return text, count, replaced

    def _scrub_names(
        self,
        text: str,
        terms: List[ScrubTerm],
        placeholder: str,
        protect: Callable[[str], str],
    ) -> Tuple[str, int, List[str]]:
        count = 0
        replaced = []
        for term in terms:
            pattern = compile_name_pattern(
                term.pattern,
                case_sensitive=term.case_sensitive,
                absorb_suffix=term.kind == TermKind.NAME,
            )
            # Callable replacement keeps backslashes in custom text literal
            replacement = protect(term.resolve(placeholder))
            text, hits = pattern.subn(lambda _match: replacement, text)
            if hits:
                count += hits
                replaced.append(term.label)
        return text, count, replaced
