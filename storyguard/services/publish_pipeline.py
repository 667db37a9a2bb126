"""
Publish Safety Pipeline Orchestrator

Full pipeline orchestration:
Draft -> Pre-validation -> Scrubbing -> Leakage check -> Post-validation -> Published

Every stage is a pure function of its inputs. A failing stage raises
immediately and the whole pipeline is re-run once the content is fixed;
no stage is retried on its own. Nothing is written anywhere: the caller
persists the returned snapshot only after run() returns.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from storyguard.config import Settings, get_settings
from storyguard.models.account import Account
from storyguard.models.content import (
    CalloutBox,
    LandingPageContent,
    PublishSnapshot,
    PublishState,
    ScrubConfig,
    ScrubResult,
    ValidationPhase,
)
from storyguard.scrubbing.company_scrubber import CompanyScrubber
from storyguard.utils.helpers import MappingInput, dedupe
from storyguard.validation.leakage import LeakageDetector, LeakageValidationError
from storyguard.validation.publish import PublishValidationError, PublishValidator

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: Dict[PublishState, List[PublishState]] = {
    PublishState.DRAFT: [PublishState.PRE_VALIDATING],
    PublishState.PRE_VALIDATING: [
        PublishState.SCRUBBING,
        PublishState.POST_VALIDATING,  # named pages skip scrubbing
        PublishState.VALIDATION_FAILED_PRE,
    ],
    PublishState.SCRUBBING: [PublishState.LEAKAGE_CHECK],
    PublishState.LEAKAGE_CHECK: [
        PublishState.POST_VALIDATING,
        PublishState.LEAKAGE_DETECTED,
    ],
    PublishState.POST_VALIDATING: [
        PublishState.PUBLISHED,
        PublishState.VALIDATION_FAILED_POST,
    ],
}


@dataclass
class PublishRun:
    """State of a single publish attempt."""

    account_id: str
    state: PublishState = PublishState.DRAFT
    history: List[PublishState] = field(default_factory=lambda: [PublishState.DRAFT])

    def transition(self, new_state: PublishState) -> None:
        if new_state not in ALLOWED_TRANSITIONS.get(self.state, []):
            raise RuntimeError(
                f"Illegal publish transition {self.state.value} -> {new_state.value}"
            )
        logger.info(
            f"Publish run for account {self.account_id}: "
            f"{self.state.value} -> {new_state.value}"
        )
        self.state = new_state
        self.history.append(new_state)


class PublishPipeline:
    """
    Sequences validation, scrubbing and leakage detection for one page.

    Pipeline steps:
    1. Validate the raw content (pre-scrub)
    2. Scrub title, subtitle, body and every callout title/body
    3. Re-check the scrubbed fragments for leaked account identifiers
    4. Validate the scrubbed content (post-scrub)
    """

    def __init__(
        self,
        scrubber: Optional[CompanyScrubber] = None,
        leakage_detector: Optional[LeakageDetector] = None,
        validator: Optional[PublishValidator] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self.scrubber = scrubber or CompanyScrubber()
        self.leakage_detector = leakage_detector or LeakageDetector(
            max_terms=self.settings.max_leaked_terms,
            placeholders=(self.settings.default_placeholder, self.settings.domain_placeholder),
        )
        self.validator = validator or PublishValidator(
            min_title_length=self.settings.min_title_length,
            min_body_characters=self.settings.min_body_characters,
            min_body_words=self.settings.min_body_words,
        )

    def run(
        self,
        account: Account,
        content: LandingPageContent,
        custom_mappings: MappingInput = None,
        include_company_name: bool = False,
    ) -> PublishSnapshot:
        """
        Produce a publish-safe snapshot of the page content.

        Args:
            account: Account graph, read once by the caller
            content: Raw title, subtitle, body and callout boxes
            custom_mappings: Ordered (pattern, replacement) pairs from org settings
            include_company_name: Named page; skip scrubbing and leakage check

        Returns:
            PublishSnapshot with the scrubbed fragments and audit counts

        Raises:
            PublishValidationError: Content incomplete before or after scrubbing
            LeakageValidationError: Identifiers survived scrubbing
        """
        run = PublishRun(account_id=account.id)

        run.transition(PublishState.PRE_VALIDATING)
        self._validate(run, content, ValidationPhase.PRE_SCRUB)

        if include_company_name:
            logger.info(f"Named page for account {account.id}: scrubbing skipped")
            snapshot = PublishSnapshot(
                title=content.title or "",
                subtitle=content.subtitle,
                body=content.body or "",
                callout_boxes=[box.model_copy() for box in content.callout_boxes],
                scrubbed=False,
            )
        else:
            run.transition(PublishState.SCRUBBING)
            snapshot = self._scrub_content(account, content, custom_mappings)

            # The scrubber's own result is never taken as proof of safety
            run.transition(PublishState.LEAKAGE_CHECK)
            try:
                self.leakage_detector.verify(account, self._fragments(snapshot))
            except LeakageValidationError:
                run.transition(PublishState.LEAKAGE_DETECTED)
                raise

        run.transition(PublishState.POST_VALIDATING)
        self._validate(
            run,
            LandingPageContent(
                title=snapshot.title,
                subtitle=snapshot.subtitle,
                body=snapshot.body,
                callout_boxes=snapshot.callout_boxes,
            ),
            ValidationPhase.POST_SCRUB,
        )

        run.transition(PublishState.PUBLISHED)
        snapshot.state_history = list(run.history)
        logger.info(
            f"Publish snapshot ready for account {account.id}: "
            f"{snapshot.replacements_made} replacement(s)"
        )
        return snapshot

    # ─── Private ──────────────────────────────────────────────────────

    def _validate(
        self, run: PublishRun, content: LandingPageContent, phase: ValidationPhase
    ) -> None:
        try:
            self.validator.ensure_valid(content, phase)
        except PublishValidationError as e:
            run.transition(e.terminal_state)
            logger.warning(
                f"Publish validation failed ({phase.value}) for account "
                f"{run.account_id}: {[issue.code for issue in e.issues]}"
            )
            raise

    def _scrub_content(
        self,
        account: Account,
        content: LandingPageContent,
        custom_mappings: MappingInput,
    ) -> PublishSnapshot:
        config = ScrubConfig(
            placeholder=self.settings.default_placeholder,
            domain_placeholder=self.settings.domain_placeholder,
        )
        results: Dict[str, ScrubResult] = {}

        def scrub(key: str, text: Optional[str]) -> str:
            result = self.scrubber.scrub_for_account(account, text, custom_mappings, config)
            results[key] = result
            return result.scrubbed_text

        title = scrub("title", content.title)
        subtitle = scrub("subtitle", content.subtitle) if content.subtitle else content.subtitle
        body = scrub("body", content.body)

        callouts = []
        for index, box in enumerate(content.callout_boxes):
            callouts.append(
                CalloutBox(
                    title=scrub(f"callout_boxes.{index}.title", box.title),
                    body=scrub(f"callout_boxes.{index}.body", box.body),
                    icon=box.icon,
                )
            )

        return PublishSnapshot(
            title=title,
            subtitle=subtitle,
            body=body,
            callout_boxes=callouts,
            scrubbed=True,
            fragment_results=results,
            replacements_made=sum(r.replacements_made for r in results.values()),
            terms_replaced=dedupe(
                term for r in results.values() for term in r.terms_replaced
            ),
        )

    @staticmethod
    def _fragments(snapshot: PublishSnapshot) -> List[Optional[str]]:
        fragments = [snapshot.title, snapshot.subtitle, snapshot.body]
        for box in snapshot.callout_boxes:
            fragments.extend([box.title, box.body])
        return fragments
