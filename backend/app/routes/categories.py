"""
Blog Backend - Category Route Handlers
========================================

What:  /api/categories (collection) and /api/categories/{id} (item).
How:   Each handler extracts the id/body, delegates to CategoryService and
       picks the success status. Errors are raised by the service and
       rendered by the global handlers in main.py.

Methods:
    /api/categories        GET, POST          (anything else → 405, Allow: GET, POST)
    /api/categories/{id}   GET, PUT, DELETE   (anything else → 405, Allow: GET, PUT, DELETE)
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Response

from app.dependencies import (
    COLLECTION_METHODS,
    ITEM_METHODS,
    UNSUPPORTED_COLLECTION_METHODS,
    UNSUPPORTED_ITEM_METHODS,
    get_category_service,
    parse_record_id,
)
from app.exceptions import MethodNotAllowedError
from app.schemas.blog import (
    CategoryPayload,
    CategoryResponse,
    CategoryWithCount,
    CategoryWithPosts,
    ErrorResponse,
)
from app.services.category_service import CategoryService

router = APIRouter(prefix="/api", tags=["Categories"])


@router.get(
    "/categories",
    response_model=List[CategoryWithCount],
    responses={500: {"model": ErrorResponse}},
    summary="List categories with post counts",
)
async def list_categories(
    service: CategoryService = Depends(get_category_service),
) -> List[CategoryWithCount]:
    return await service.list_categories()


@router.post(
    "/categories",
    status_code=201,
    response_model=CategoryResponse,
    responses={
        400: {"description": "Name missing or already taken", "model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Create a category",
)
async def create_category(
    payload: Optional[CategoryPayload] = None,
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    # A missing body behaves like an empty object
    return await service.create_category(payload or CategoryPayload())


@router.get(
    "/categories/{record_id}",
    response_model=CategoryWithPosts,
    responses={
        400: {"description": "Invalid id", "model": ErrorResponse},
        404: {"description": "Category not found", "model": ErrorResponse},
    },
    summary="Get a category with its posts",
)
async def get_category(
    category_id: int = Depends(parse_record_id),
    service: CategoryService = Depends(get_category_service),
) -> CategoryWithPosts:
    return await service.get_category(category_id)


@router.put(
    "/categories/{record_id}",
    response_model=CategoryResponse,
    responses={
        400: {"description": "Invalid id, empty name or name taken", "model": ErrorResponse},
        404: {"description": "Category not found", "model": ErrorResponse},
    },
    summary="Update a category",
)
async def update_category(
    payload: Optional[CategoryPayload] = None,
    category_id: int = Depends(parse_record_id),
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    return await service.update_category(category_id, payload or CategoryPayload())


@router.delete(
    "/categories/{record_id}",
    status_code=204,
    response_class=Response,
    responses={
        400: {"description": "Invalid id", "model": ErrorResponse},
        404: {"description": "Category not found", "model": ErrorResponse},
    },
    summary="Delete a category",
    description="Posts filed under the category are kept and detached from it.",
)
async def delete_category(
    category_id: int = Depends(parse_record_id),
    service: CategoryService = Depends(get_category_service),
) -> Response:
    await service.delete_category(category_id)
    return Response(status_code=204)


# ── Unsupported verbs ─────────────────────────────────────────────────────


@router.api_route(
    "/categories",
    methods=UNSUPPORTED_COLLECTION_METHODS,
    include_in_schema=False,
)
async def categories_method_not_allowed() -> Response:
    raise MethodNotAllowedError(COLLECTION_METHODS)


@router.api_route(
    "/categories/{record_id}",
    methods=UNSUPPORTED_ITEM_METHODS,
    include_in_schema=False,
)
async def category_method_not_allowed(
    category_id: int = Depends(parse_record_id),
) -> Response:
    # The id is checked first: a malformed id is 400 whatever the verb
    raise MethodNotAllowedError(ITEM_METHODS, context={"category_id": category_id})
