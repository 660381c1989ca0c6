"""
Content page endpoints backed by the page-manager proxy.
"""
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Path, Query
from ..models import PageResponse, PageListResponse, CreatePageRequest, UpdatePageRequest, ErrorResponse
from ..dependencies import get_page_client
from ..errors import http_error
from ...pages.page_client import PageClient


router = APIRouter(prefix="/pages", tags=["pages"])


def _not_found(page_ref: str) -> HTTPException:
    return HTTPException(
        status_code=404,
        detail={"message": "Page not found", "error_code": "NOT_FOUND", "details": {"page": page_ref}}
    )


@router.get(
    "",
    response_model=PageListResponse,
    summary="List pages",
    description="All pages, or the single page matching a slug",
    responses={
        200: {"description": "Pages retrieved"},
        502: {"description": "Page proxy failed", "model": ErrorResponse},
    }
)
def list_pages(
    slug: Optional[str] = Query(None, description="Only the page with this slug"),
    page_client: PageClient = Depends(get_page_client)
):
    try:
        if slug:
            page = page_client.get_page_by_slug(slug)
            pages = [page] if page else []
        else:
            pages = page_client.get_pages()
    except Exception as e:
        raise http_error(e)

    return {
        "success": True,
        "message": f"Retrieved {len(pages)} pages",
        "data": [page.to_dict() for page in pages]
    }


@router.post(
    "",
    response_model=PageResponse,
    status_code=201,
    summary="Create a page",
    responses={
        201: {"description": "Page created"},
        502: {"description": "Page proxy failed", "model": ErrorResponse},
    }
)
def create_page(
    page_data: CreatePageRequest,
    page_client: PageClient = Depends(get_page_client)
):
    try:
        page = page_client.create_page(
            page_data.slug, page_data.title, page_data.content, page_data.is_published
        )
    except Exception as e:
        raise http_error(e)

    return {
        "success": True,
        "message": "Page created successfully",
        "data": page.to_dict()
    }


@router.get(
    "/{page_id}",
    response_model=PageResponse,
    summary="Get a page",
    responses={
        200: {"description": "Page retrieved"},
        404: {"description": "Page not found", "model": ErrorResponse},
    }
)
def get_page(
    page_id: str = Path(..., description="Page ID"),
    page_client: PageClient = Depends(get_page_client)
):
    try:
        page = page_client.get_page_by_id(page_id)
    except Exception as e:
        raise http_error(e)

    if page is None:
        raise _not_found(page_id)
    return {
        "success": True,
        "message": "Page retrieved",
        "data": page.to_dict()
    }


@router.patch(
    "/{page_id}",
    response_model=PageResponse,
    summary="Update a page",
    responses={
        200: {"description": "Page updated"},
        422: {"description": "Nothing to update", "model": ErrorResponse},
    }
)
def update_page(
    updates: UpdatePageRequest,
    page_id: str = Path(..., description="Page ID"),
    page_client: PageClient = Depends(get_page_client)
):
    try:
        page = page_client.update_page(page_id, **updates.model_dump(exclude_unset=True))
    except Exception as e:
        raise http_error(e)

    return {
        "success": True,
        "message": "Page updated successfully",
        "data": page.to_dict()
    }


@router.delete(
    "/{page_id}",
    response_model=PageResponse,
    summary="Delete a page",
    responses={
        200: {"description": "Page deleted"},
        502: {"description": "Page proxy failed", "model": ErrorResponse},
    }
)
def delete_page(
    page_id: str = Path(..., description="Page ID"),
    page_client: PageClient = Depends(get_page_client)
):
    try:
        page_client.delete_page(page_id)
    except Exception as e:
        raise http_error(e)

    return {
        "success": True,
        "message": "Page deleted successfully",
        "data": {"id": page_id}
    }
