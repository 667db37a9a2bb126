# Identity scrubbing module
from storyguard.scrubbing.company_scrubber import CompanyScrubber
from storyguard.scrubbing.contact_scrubber import ContactIdentityScrubber
from storyguard.scrubbing.normalization import normalize_company_name
from storyguard.scrubbing.term_catalog import (
    ScrubTerm,
    TermCatalog,
    TermCatalogBuilder,
    TermKind,
    build_term_catalog,
)
from storyguard.scrubbing.titles import (
    anonymize_title,
    format_attribution,
    format_inline_attribution,
)

__all__ = [
    "CompanyScrubber",
    "ContactIdentityScrubber",
    "normalize_company_name",
    "ScrubTerm",
    "TermCatalog",
    "TermCatalogBuilder",
    "TermKind",
    "build_term_catalog",
    "anonymize_title",
    "format_attribution",
    "format_inline_attribution",
]
