"""
Scrub Preview API Routes

Endpoints for the editor's anonymization preview:
1. POST /api/scrub/preview - Scrub one text fragment for an account
2. POST /api/scrub/terms - Inspect the term catalog built for an account
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field
from typing import List, Optional, Tuple
import logging

from storyguard.config import get_settings
from storyguard.models.account import Account
from storyguard.models.content import ScrubConfig, ScrubResult
from storyguard.scrubbing.company_scrubber import CompanyScrubber

logger = logging.getLogger(__name__)
router = APIRouter()

scrubber = CompanyScrubber()


class ScrubPreviewRequest(BaseModel):
    """Request model for the scrub preview endpoint."""

    account: Account = Field(..., description="Account graph to scrub against")
    text: str = Field(..., description="Text fragment to scrub")
    custom_mappings: List[Tuple[str, str]] = Field(
        default_factory=list,
        description="Ordered [pattern, replacement] pairs from org settings",
    )
    placeholder: Optional[str] = Field(
        None, description="Company placeholder (defaults to the configured one)"
    )


class TermCatalogRequest(BaseModel):
    """Request model for the term catalog endpoint."""

    account: Account
    custom_mappings: List[Tuple[str, str]] = Field(default_factory=list)


class TermEntry(BaseModel):
    pattern: str
    replacement: Optional[str] = None
    kind: str
    case_sensitive: bool


class TermCatalogResponse(BaseModel):
    domain_terms: List[TermEntry]
    name_terms: List[TermEntry]


@router.post("/preview", response_model=ScrubResult)
async def scrub_preview(request: ScrubPreviewRequest):
    """
    Scrub a single fragment and report what was replaced.

    Example request body:
    ```json
    {
        "account": {"id": "acc_1", "name": "Acme Corp", "domain": "acme.com"},
        "text": "Acme Corp cut onboarding time in half."
    }
    ```

    Example response:
    ```json
    {
        "scrubbed_text": "the client cut onboarding time in half.",
        "replacements_made": 1,
        "terms_replaced": ["Acme Corp"]
    }
    ```
    """
    settings = get_settings()
    logger.info(
        f"Scrub preview request: account_id={request.account.id}, "
        f"text_length={len(request.text)}"
    )

    try:
        config = ScrubConfig(
            placeholder=request.placeholder or settings.default_placeholder,
            domain_placeholder=settings.domain_placeholder,
        )
        return scrubber.scrub_for_account(
            request.account, request.text, request.custom_mappings, config
        )
    except Exception as e:
        logger.error(f"Error in scrub preview endpoint: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to scrub text: {str(e)}")


@router.post("/terms", response_model=TermCatalogResponse)
async def scrub_terms(request: TermCatalogRequest):
    """List the domain and name terms that would be scrubbed, in application order."""
    catalog = scrubber.preview_catalog(request.account, request.custom_mappings)

    def entries(terms):
        return [
            TermEntry(
                pattern=term.pattern,
                replacement=term.replacement,
                kind=term.kind.value,
                case_sensitive=term.case_sensitive,
            )
            for term in terms
        ]

    return TermCatalogResponse(
        domain_terms=entries(catalog.domain_terms),
        name_terms=entries(catalog.name_terms),
    )
