"""
Publish Validation

Structural completeness checks run before scrubbing (reject obviously
incomplete drafts) and again after scrubbing (catch text that scrubbing
shrank below the usable threshold). All issues are collected; nothing
fails fast.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from storyguard.models.content import (
    CalloutBox,
    LandingPageContent,
    PublishState,
    PublishValidationIssue,
    ValidationPhase,
)
from storyguard.utils.helpers import count_words, strip_markdown

logger = logging.getLogger(__name__)

CalloutInput = Union[CalloutBox, Dict[str, Any]]


class PublishValidationError(Exception):
    """Raised when content is structurally incomplete - recoverable by editing."""

    def __init__(
        self,
        issues: List[PublishValidationIssue],
        phase: ValidationPhase = ValidationPhase.PRE_SCRUB,
    ):
        self.issues = list(issues)
        self.phase = ValidationPhase(phase)
        super().__init__("Publish validation failed")

    @property
    def terminal_state(self) -> PublishState:
        if self.phase == ValidationPhase.POST_SCRUB:
            return PublishState.VALIDATION_FAILED_POST
        return PublishState.VALIDATION_FAILED_PRE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": "publish_validation_failed",
            "message": str(self),
            "phase": self.phase.value,
            "issues": [issue.model_dump() for issue in self.issues],
        }


def _callout_value(box: CalloutInput, key: str) -> str:
    value = box.get(key) if isinstance(box, dict) else getattr(box, key, None)
    return (value or "").strip()


class PublishValidator:
    """Checks title, body and callout boxes for publish readiness."""

    def __init__(
        self,
        min_title_length: int = 3,
        min_body_characters: int = 40,
        min_body_words: int = 8,
    ):
        self.min_title_length = min_title_length
        self.min_body_characters = min_body_characters
        self.min_body_words = min_body_words

    def validate(
        self,
        title: Optional[str],
        body: Optional[str],
        callout_boxes: Sequence[CalloutInput] = (),
        phase: ValidationPhase = ValidationPhase.PRE_SCRUB,
    ) -> List[PublishValidationIssue]:
        """
        Return every structural issue found, in field order.

        Args:
            title: Page title
            body: Markdown body
            callout_boxes: CalloutBox models or plain dicts
            phase: pre-scrub issues point at editable fields,
                post-scrub issues at the scrubbed ones

        Returns:
            List of PublishValidationIssue, empty when publishable
        """
        phase = ValidationPhase(phase)
        scrubbed = phase == ValidationPhase.POST_SCRUB
        title_field = "scrubbed_title" if scrubbed else "title"
        body_field = "scrubbed_body" if scrubbed else "editable_body"

        issues: List[PublishValidationIssue] = []
        title_value = (title or "").strip()
        body_value = (body or "").strip()

        if len(title_value) < self.min_title_length:
            issues.append(
                PublishValidationIssue(
                    field=title_field,
                    code="title_too_short",
                    message=f"Title must be at least {self.min_title_length} characters before publish.",
                )
            )

        if not body_value:
            issues.append(
                PublishValidationIssue(
                    field=body_field,
                    code="body_required",
                    message="Body content is required before publish.",
                )
            )
        else:
            plain_text = strip_markdown(body_value)
            if (
                len(plain_text) < self.min_body_characters
                or count_words(plain_text) < self.min_body_words
            ):
                issues.append(
                    PublishValidationIssue(
                        field=body_field,
                        code="body_too_short",
                        message="Body content is too short to publish. Add more narrative context.",
                    )
                )

        for index, box in enumerate(callout_boxes):
            if not _callout_value(box, "title"):
                issues.append(
                    PublishValidationIssue(
                        field=f"callout_boxes.{index}.title",
                        code="callout_title_required",
                        message=f"Callout {index + 1} needs a title before publish.",
                    )
                )
            if not _callout_value(box, "body"):
                issues.append(
                    PublishValidationIssue(
                        field=f"callout_boxes.{index}.body",
                        code="callout_body_required",
                        message=f"Callout {index + 1} needs body text before publish.",
                    )
                )

        if issues:
            logger.debug(f"Publish validation ({phase.value}) found {len(issues)} issue(s)")
        return issues

    def validate_content(
        self,
        content: LandingPageContent,
        phase: ValidationPhase = ValidationPhase.PRE_SCRUB,
    ) -> List[PublishValidationIssue]:
        return self.validate(content.title, content.body, content.callout_boxes, phase)

    def ensure_valid(
        self,
        content: LandingPageContent,
        phase: ValidationPhase = ValidationPhase.PRE_SCRUB,
    ) -> None:
        """
        Raises:
            PublishValidationError: With every issue found in this phase
        """
        issues = self.validate_content(content, phase)
        if issues:
            raise PublishValidationError(issues, phase)
