# Publish-safety validation module
from storyguard.validation.leakage import LeakageDetector, LeakageValidationError
from storyguard.validation.publish import PublishValidationError, PublishValidator

__all__ = [
    "LeakageDetector",
    "LeakageValidationError",
    "PublishValidationError",
    "PublishValidator",
]
