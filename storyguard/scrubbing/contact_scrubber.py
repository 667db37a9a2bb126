"""
Contact Identity Scrubber

Replaces contact attributions with seniority-preserving descriptors:

    "Jeff Bezos, CEO"              -> "a senior executive at the client"
    "— Jeff Bezos, CEO"            -> "— a senior executive at the client"
    "Jeff Bezos, CEO of Acme Corp" -> "a senior executive at the client"
    "said Jeff Bezos (CEO)"        -> "said a senior executive at the client"

Attributions are replaced as a whole unit before any company-name pass runs,
so a fragment of a person's name can't be half-replaced by a company term.
"""

import re
import logging
from typing import Callable, Iterable, List, Optional, Pattern

from storyguard.models.account import Contact
from storyguard.models.content import ScrubResult
from storyguard.scrubbing.normalization import SUFFIX_TAIL_PATTERN
from storyguard.scrubbing.titles import (
    DEFAULT_CLIENT_LABEL,
    GENERIC_TEAM_MEMBER,
    anonymize_title,
)
from storyguard.utils.helpers import dedupe

logger = logging.getLogger(__name__)

MIN_CONTACT_NAME_LENGTH = 3

# An email ends where the address characters stop
_EMAIL_EDGE_BEFORE = r"(?<![\w.+\-])"
_EMAIL_EDGE_AFTER = r"(?![\w\-]|\.\w)"


def literal_pattern(text: str) -> str:
    """Escape text for a regex, letting any run of whitespace match."""
    return r"\s+".join(re.escape(part) for part in text.split())


def _with_name(contacts: Iterable[Contact]) -> List[Contact]:
    named = [c for c in contacts if c.name and c.name.strip()]
    # Longer names first: "Jane Doering" must not be cut short by "Jane Doe"
    return sorted(named, key=lambda c: len(c.name.strip()), reverse=True)


class ContactIdentityScrubber:
    """Scrubs contact names and "Name, Title" attributions from text."""

    def __init__(
        self,
        placeholder: str = DEFAULT_CLIENT_LABEL,
        protect: Optional[Callable[[str], str]] = None,
    ):
        self.placeholder = placeholder
        # Hook applied to every inserted phrase before it lands in the text
        self.protect = protect or (lambda replacement: replacement)

    def _company_tail(self, company_terms: Iterable[str]) -> str:
        terms = sorted(dedupe(company_terms, case_sensitive=False), key=len, reverse=True)
        if not terms:
            return ""
        alternation = "|".join(literal_pattern(term) for term in terms)
        return (
            rf"(?:\s+(?:of|at)\s+(?:{alternation}){SUFFIX_TAIL_PATTERN}(?:'s)?)?"
        )

    def _attribution_patterns(
        self, contact: Contact, company_tail: str
    ) -> List[Pattern[str]]:
        name = literal_pattern(contact.name.strip())
        title = literal_pattern(contact.title.strip())
        comma_pattern = re.compile(
            rf"(?<!\w){name},?\s+{title}{company_tail}(?!\w)", re.IGNORECASE
        )
        paren_pattern = re.compile(
            rf"(?<!\w){name}\s*\(\s*{title}\s*\)", re.IGNORECASE
        )
        return [comma_pattern, paren_pattern]

    def scrub_attributions(
        self,
        text: str,
        contacts: Iterable[Contact],
        company_terms: Iterable[str] = (),
    ) -> ScrubResult:
        """
        Replace "Name, Title[ of/at Company]" and "Name (Title)" spans.

        Only contacts with both a name and a title are considered. The
        optional "of/at Company" tail is consumed only when the company is
        one of the given company terms, so "CEO at launch" stays intact.

        Args:
            text: Text to scrub
            contacts: Account contacts
            company_terms: Company-name spellings allowed in the tail

        Returns:
            ScrubResult with one replacement per attribution span
        """
        scrubbed = text
        count = 0
        replaced: List[str] = []
        company_tail = self._company_tail(company_terms)

        for contact in _with_name(contacts):
            if not contact.title or not contact.title.strip():
                continue

            anon_label = self.protect(anonymize_title(contact.title, self.placeholder))
            comma_pattern, paren_pattern = self._attribution_patterns(contact, company_tail)

            scrubbed, hits = comma_pattern.subn(lambda _match: anon_label, scrubbed)
            if hits:
                count += hits
                replaced.append(f"{contact.name.strip()}, {contact.title.strip()}")

            scrubbed, hits = paren_pattern.subn(lambda _match: anon_label, scrubbed)
            if hits:
                count += hits
                replaced.append(f"{contact.name.strip()} ({contact.title.strip()})")

        if count:
            logger.debug(f"Replaced {count} contact attribution(s)")

        return ScrubResult(
            scrubbed_text=scrubbed,
            replacements_made=count,
            terms_replaced=dedupe(replaced),
        )

    def scrub_bare_names(self, text: str, contacts: Iterable[Contact]) -> ScrubResult:
        """
        Replace contact names that appear without their title.

        A name is replaced by its anonymized title when the contact has one,
        otherwise by the generic team-member phrase.
        """
        scrubbed = text
        count = 0
        replaced: List[str] = []

        for contact in _with_name(contacts):
            name = contact.name.strip()
            if len(name) < MIN_CONTACT_NAME_LENGTH:
                continue

            pattern = re.compile(rf"(?<!\w){literal_pattern(name)}(?!\w)", re.IGNORECASE)
            label = self.protect(self.label_for(contact))
            scrubbed, hits = pattern.subn(lambda _match: label, scrubbed)
            if hits:
                count += hits
                replaced.append(name)

        if count:
            logger.debug(f"Replaced {count} bare contact name(s)")

        return ScrubResult(
            scrubbed_text=scrubbed,
            replacements_made=count,
            terms_replaced=dedupe(replaced),
        )

    def scrub_emails(
        self, text: str, contacts: Iterable[Contact], replacement: str
    ) -> ScrubResult:
        """
        Replace contact email addresses as a whole.

        Runs before the domain pass; otherwise "jane.doe@acme.com" would
        keep the person's local part in front of the domain placeholder.
        """
        scrubbed = text
        count = 0
        replaced: List[str] = []
        protected = self.protect(replacement)

        emails = dedupe(
            (c.email.strip() for c in contacts if c.email and "@" in c.email),
            case_sensitive=False,
        )
        for email in sorted(emails, key=len, reverse=True):
            pattern = re.compile(
                rf"{_EMAIL_EDGE_BEFORE}{re.escape(email)}{_EMAIL_EDGE_AFTER}", re.IGNORECASE
            )
            scrubbed, hits = pattern.subn(lambda _match: protected, scrubbed)
            if hits:
                count += hits
                replaced.append(email)

        if count:
            logger.debug(f"Replaced {count} contact email address(es)")

        return ScrubResult(
            scrubbed_text=scrubbed,
            replacements_made=count,
            terms_replaced=dedupe(replaced),
        )

    def label_for(self, contact: Contact) -> str:
        title: Optional[str] = contact.title.strip() if contact.title else None
        if title:
            return anonymize_title(title, self.placeholder)
        return GENERIC_TEAM_MEMBER.format(client=self.placeholder)
