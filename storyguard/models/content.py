"""
Publish Content Models

Text fragments going into the scrub pipeline and the results coming out of it.
"""

from enum import Enum
from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class CalloutIcon(str, Enum):
    """Icon shown next to a callout box."""

    METRIC = "metric"
    QUOTE = "quote"
    INSIGHT = "insight"
    TIMELINE = "timeline"
    WARNING = "warning"
    SUCCESS = "success"


class CalloutBox(BaseModel):
    """Highlighted box rendered alongside the page body."""

    title: Optional[str] = ""
    body: Optional[str] = ""
    icon: Optional[CalloutIcon] = None


class LandingPageContent(BaseModel):
    """Editable fragments of a landing page, before scrubbing."""

    title: Optional[str] = ""
    subtitle: Optional[str] = None
    body: Optional[str] = Field("", description="Markdown body")
    callout_boxes: List[CalloutBox] = Field(default_factory=list)


class ScrubConfig(BaseModel):
    """Per-call scrubbing options."""

    placeholder: str = "the client"
    domain_placeholder: str = "[client-domain]"
    skip_scrub: bool = False  # Named pages keep the company name


class ScrubResult(BaseModel):
    """Outcome of scrubbing a single text fragment."""

    scrubbed_text: str
    replacements_made: int = Field(0, ge=0)
    terms_replaced: List[str] = Field(
        default_factory=list, description="Deduplicated labels, for audit/preview"
    )


class ValidationPhase(str, Enum):
    """When a publish validation pass runs relative to scrubbing."""

    PRE_SCRUB = "pre-scrub"
    POST_SCRUB = "post-scrub"


class PublishState(str, Enum):
    """States of one publish attempt; the last three are terminal failures."""

    DRAFT = "draft"
    PRE_VALIDATING = "pre_validating"
    SCRUBBING = "scrubbing"
    LEAKAGE_CHECK = "leakage_check"
    POST_VALIDATING = "post_validating"
    PUBLISHED = "published"
    VALIDATION_FAILED_PRE = "validation_failed_pre"
    VALIDATION_FAILED_POST = "validation_failed_post"
    LEAKAGE_DETECTED = "leakage_detected"


class PublishValidationIssue(BaseModel):
    """A single structural problem blocking publish."""

    field: str
    code: str
    message: str


class PublishSnapshot(BaseModel):
    """Scrubbed fragments ready to be written to the published page."""

    title: str
    subtitle: Optional[str] = None
    body: str
    callout_boxes: List[CalloutBox] = Field(default_factory=list)
    scrubbed: bool = True
    fragment_results: Dict[str, ScrubResult] = Field(default_factory=dict)
    replacements_made: int = 0
    terms_replaced: List[str] = Field(default_factory=list)
    state_history: List[PublishState] = Field(default_factory=list)
