"""
Scrub Leakage Detection

Last line of defense before a page goes public. Re-derives a deliberately
small set of account identifiers (name, normalized name, domains) and scans
the already-scrubbed text for any of them.

This does NOT reuse the term catalog: a blind spot in the catalog or the
replacement engine must not also be a blind spot here.
"""

import re
import logging
from typing import Any, Dict, Iterable, List

from storyguard.models.account import Account
from storyguard.models.content import PublishState
from storyguard.scrubbing.normalization import normalize_company_name, strip_corporate_suffix
from storyguard.utils.helpers import flatten_fragments

logger = logging.getLogger(__name__)

MAX_LEAKED_TERMS = 10
DEFAULT_PLACEHOLDERS = ("the client", "[client-domain]")
MIN_CANDIDATE_LENGTH = 3


class LeakageValidationError(Exception):
    """Raised when scrubbed output still contains account identifiers - aborts publish."""

    terminal_state = PublishState.LEAKAGE_DETECTED

    def __init__(self, leaked_terms: List[str]):
        self.leaked_terms = list(leaked_terms)
        super().__init__(
            "Scrub validation failed: detected unsanitized account identifiers "
            f"({', '.join(self.leaked_terms)})"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": "scrub_validation_failed",
            "message": str(self),
            "leaked_terms": self.leaked_terms,
        }


class LeakageDetector:
    """Independent identifier scan over scrubbed text."""

    def __init__(
        self,
        max_terms: int = MAX_LEAKED_TERMS,
        placeholders: Iterable[str] = DEFAULT_PLACEHOLDERS,
    ):
        self.max_terms = max_terms
        # Inserted placeholders are not leaks, even when a name hides in one
        self.placeholders = sorted((p.lower() for p in placeholders if p), key=len, reverse=True)

    def candidates(self, account: Account) -> List[str]:
        """Minimal identifier set: name and its suffix-free forms, domain and aliases."""
        raw = []
        if account.name and account.name.strip():
            raw.append(account.name.strip())
            raw.append(normalize_company_name(account.name))
            # Hyphens survive here; the normalized form turns them into spaces
            raw.append(strip_corporate_suffix(account.name))
        if account.normalized_name:
            raw.append(account.normalized_name.strip())
        if account.domain:
            raw.append(account.domain.strip())
        raw.extend(alias.strip() for alias in account.domain_aliases if alias)

        # dict keeps first-seen order while deduplicating on lower case
        unique = {}
        for candidate in raw:
            if candidate and candidate.lower() not in unique:
                unique[candidate.lower()] = candidate
        return list(unique.values())

    def detect(self, account: Account, fragments: Iterable[Any]) -> List[str]:
        """
        Find identifiers still present in the given text fragments.

        Name-like candidates match on word boundaries; domain-like candidates
        (containing ".") match as substrings. Comparison is case-insensitive.

        Args:
            account: Account whose identifiers must not appear
            fragments: Scrubbed title, subtitle, body, callout titles/bodies

        Returns:
            Up to max_terms leaked identifiers, in candidate order
        """
        combined = "\n".join(flatten_fragments(list(fragments))).lower()
        for placeholder in self.placeholders:
            combined = combined.replace(placeholder, "\n")
        if not combined.strip():
            return []

        leaked = []
        for raw_candidate in self.candidates(account):
            candidate = raw_candidate.lower()
            if len(candidate) < MIN_CANDIDATE_LENGTH:
                continue
            if "." in candidate:
                pattern = re.compile(re.escape(candidate))
            else:
                pattern = re.compile(rf"(?<!\w){re.escape(candidate)}(?!\w)")
            if pattern.search(combined):
                leaked.append(raw_candidate)
            if len(leaked) >= self.max_terms:
                break

        return leaked

    def verify(self, account: Account, fragments: Iterable[Any]) -> None:
        """
        Raise if any identifier leaked through scrubbing.

        Raises:
            LeakageValidationError: With the leaked terms; never swallowed
        """
        leaked = self.detect(account, fragments)
        if leaked:
            logger.error(
                f"Scrub leakage detected for account {account.id}: "
                f"{len(leaked)} identifier(s) still present"
            )
            raise LeakageValidationError(leaked)
        logger.debug(f"No scrub leakage for account {account.id}")
