"""
Router for company endpoints.

Handlers stay thin: one repository call each, wrapped in the standard
response envelope. Repository errors are mapped to HTTP statuses by
:mod:`tenantdb.middleware.error_handler`.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request, status

from tenantdb.repositories import CompanyMainRepository
from tenantdb.schemas.companies import CompanyCreate, CompanyResponse, CompanyUpdate
from tenantdb.utils.api_response import success_response

router = APIRouter(
    prefix="/api/companies",
    tags=["companies"]
)

logger = logging.getLogger(__name__)


def get_company_repository(request: Request) -> CompanyMainRepository:
    """Build the repository on the adapter acquired at startup."""
    return CompanyMainRepository(request.app.state.db)


def _serialize(company) -> Dict[str, Any]:
    return CompanyResponse.model_validate(company.to_dict()).model_dump(mode="json", exclude_none=True)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_company(
    company: CompanyCreate,
    repository: CompanyMainRepository = Depends(get_company_repository)
):
    """Create a new company"""
    created = await repository.create(company.model_dump())
    return success_response(data=_serialize(created), message="Company created")


@router.get("/slug/{slug}")
async def get_company_by_slug(
    slug: str,
    repository: CompanyMainRepository = Depends(get_company_repository)
):
    """Get a company summary by slug"""
    company = await repository.find_by_slug(slug)
    if company is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Company not found")
    return success_response(data=_serialize(company))


@router.get("/{company_id}")
async def get_company(
    company_id: str,
    repository: CompanyMainRepository = Depends(get_company_repository)
):
    """Get a company by id"""
    company = await repository.find_by_id(company_id)
    if company is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Company not found")
    return success_response(data=_serialize(company))


@router.patch("/{company_id}")
async def update_company(
    company_id: str,
    changes: CompanyUpdate,
    repository: CompanyMainRepository = Depends(get_company_repository)
):
    """Update the supplied fields of a company"""
    updated = await repository.update(company_id, changes.model_dump(exclude_unset=True))
    return success_response(data=_serialize(updated), message="Company updated")


@router.delete("/{company_id}")
async def delete_company(
    company_id: str,
    repository: CompanyMainRepository = Depends(get_company_repository)
):
    """Delete a company permanently"""
    deleted = await repository.delete(company_id)
    logger.info(f"Company {company_id} deleted via API")
    return success_response(data=_serialize(deleted), message="Company deleted")
