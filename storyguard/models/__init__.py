# Shared data models
from storyguard.models.account import Account, Contact
from storyguard.models.content import (
    CalloutBox,
    CalloutIcon,
    LandingPageContent,
    PublishSnapshot,
    PublishState,
    PublishValidationIssue,
    ScrubConfig,
    ScrubResult,
    ValidationPhase,
)

__all__ = [
    "Account",
    "Contact",
    "CalloutBox",
    "CalloutIcon",
    "LandingPageContent",
    "PublishSnapshot",
    "PublishState",
    "PublishValidationIssue",
    "ScrubConfig",
    "ScrubResult",
    "ValidationPhase",
]
