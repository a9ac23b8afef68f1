"""
Blog Backend - Post Route Handlers
====================================

What:  /api/posts (collection) and /api/posts/{id} (item).
How:   Thin handlers over PostService; the service raises, main.py renders.

Methods:
    /api/posts        GET, POST           (anything else → 405, Allow: GET, POST)
    /api/posts/{id}   GET, PUT, DELETE    (anything else → 405, Allow: GET, PUT, DELETE;
                                          a malformed id is 400 first)
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Response

from app.dependencies import (
    COLLECTION_METHODS,
    ITEM_METHODS,
    UNSUPPORTED_COLLECTION_METHODS,
    UNSUPPORTED_ITEM_METHODS,
    get_post_service,
    parse_record_id,
)
from app.exceptions import MethodNotAllowedError
from app.schemas.blog import ErrorResponse, PostPayload, PostResponse, PostWithCategory
from app.services.post_service import PostService

router = APIRouter(prefix="/api", tags=["Posts"])


@router.get(
    "/posts",
    response_model=List[PostWithCategory],
    responses={500: {"model": ErrorResponse}},
    summary="List posts with their categories",
)
async def list_posts(
    service: PostService = Depends(get_post_service),
) -> List[PostWithCategory]:
    return await service.list_posts()


@router.post(
    "/posts",
    status_code=201,
    response_model=PostResponse,
    responses={
        400: {"description": "Title missing or category not found", "model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Create a post",
)
async def create_post(
    payload: Optional[PostPayload] = None,
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    return await service.create_post(payload or PostPayload())


@router.get(
    "/posts/{record_id}",
    response_model=PostWithCategory,
    responses={
        400: {"description": "Invalid id", "model": ErrorResponse},
        404: {"description": "Post not found", "model": ErrorResponse},
    },
    summary="Get a post with its category",
)
async def get_post(
    post_id: int = Depends(parse_record_id),
    service: PostService = Depends(get_post_service),
) -> PostWithCategory:
    return await service.get_post(post_id)


@router.put(
    "/posts/{record_id}",
    response_model=PostResponse,
    responses={
        400: {"description": "Invalid id, empty title or category not found", "model": ErrorResponse},
        404: {"description": "Post not found", "model": ErrorResponse},
    },
    summary="Update a post",
    description=(
        "Fields absent from the body keep their value, except categoryId: "
        "leaving it out detaches the post from its category."
    ),
)
async def update_post(
    payload: Optional[PostPayload] = None,
    post_id: int = Depends(parse_record_id),
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    return await service.update_post(post_id, payload or PostPayload())


@router.delete(
    "/posts/{record_id}",
    status_code=204,
    response_class=Response,
    responses={
        400: {"description": "Invalid id", "model": ErrorResponse},
        404: {"description": "Post not found", "model": ErrorResponse},
    },
    summary="Delete a post",
)
async def delete_post(
    post_id: int = Depends(parse_record_id),
    service: PostService = Depends(get_post_service),
) -> Response:
    await service.delete_post(post_id)
    return Response(status_code=204)


# ── Unsupported verbs ─────────────────────────────────────────────────────


@router.api_route(
    "/posts",
    methods=UNSUPPORTED_COLLECTION_METHODS,
    include_in_schema=False,
)
async def posts_method_not_allowed() -> Response:
    raise MethodNotAllowedError(COLLECTION_METHODS)


@router.api_route(
    "/posts/{record_id}",
    methods=UNSUPPORTED_ITEM_METHODS,
    include_in_schema=False,
)
async def post_method_not_allowed(
    post_id: int = Depends(parse_record_id),
) -> Response:
    # The id is checked first: a malformed id is 400 whatever the verb
    raise MethodNotAllowedError(ITEM_METHODS, context={"post_id": post_id})
