"""
Publish Check API Routes

POST /api/publish/check - Run the full publish-safety pipeline and return
the scrubbed snapshot, or a 422 describing why the page can't go public.
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field
from typing import List, Tuple
import logging

from storyguard.models.account import Account
from storyguard.models.content import LandingPageContent, PublishSnapshot
from storyguard.services.publish_pipeline import PublishPipeline
from storyguard.validation.leakage import LeakageValidationError
from storyguard.validation.publish import PublishValidationError

logger = logging.getLogger(__name__)
router = APIRouter()


class PublishCheckRequest(BaseModel):
    """Request model for the publish check endpoint."""

    account: Account = Field(..., description="Account graph of the page's client")
    content: LandingPageContent = Field(..., description="Raw page fragments")
    custom_mappings: List[Tuple[str, str]] = Field(
        default_factory=list,
        description="Ordered [pattern, replacement] pairs from org settings",
    )
    include_company_name: bool = Field(
        False, description="Named page: publish without scrubbing"
    )


@router.post("/check", response_model=PublishSnapshot)
async def publish_check(request: PublishCheckRequest):
    """
    Validate, scrub and leak-check a landing page.

    Pipeline:
    1. Pre-scrub structural validation
    2. Company and contact scrubbing
    3. Independent leakage detection
    4. Post-scrub structural validation
    """
    logger.info(
        f"Publish check request: account_id={request.account.id}, "
        f"callouts={len(request.content.callout_boxes)}, "
        f"include_company_name={request.include_company_name}"
    )

    try:
        pipeline = PublishPipeline()
        return pipeline.run(
            request.account,
            request.content,
            custom_mappings=request.custom_mappings,
            include_company_name=request.include_company_name,
        )
    except (LeakageValidationError, PublishValidationError) as e:
        raise HTTPException(status_code=422, detail=e.to_dict())
    except Exception as e:
        logger.error(f"Error in publish check endpoint: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Publish check failed: {str(e)}")
