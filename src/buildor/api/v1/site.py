"""Marketing site content endpoints."""

from fastapi import APIRouter, HTTPException, status

from src.buildor.content import SITE_CONTENT, get_section
from src.buildor.schemas.site import SiteContent, SiteSection

router = APIRouter(prefix="/site", tags=["site"])


@router.get("", response_model=SiteContent)
async def get_site() -> SiteContent:
    """All marketing sections: hero, bento, arch, how, platforms, cta."""
    return SITE_CONTENT


@router.get(
    "/{section}",
    response_model=SiteSection,
    responses={404: {"description": "Unknown section"}},
)
async def get_site_section(section: str) -> SiteSection:
    content = get_section(section)
    if content is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown section: {section}",
        )
    return content
