"""
Blog Backend - Page Routes (View Layer)
=========================================

What:  Server-rendered HTML for the post list (/) and post detail (/posts/{id}).
How:   Reads through the same PostService the API uses and hands the same
       response schemas to Jinja2 templates. No logic of its own.

States:
    /            posts grid | "No posts yet" | error message (HTTP 500)
    /posts/{id}  post detail | not-found page (HTTP 404) for unknown or
                 malformed ids | error page (HTTP 500)
"""

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.exceptions import NotFoundError, UnhandledStoreError, ValidationError
from app.dependencies import get_post_service, parse_record_id
from app.services.post_service import PostService

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["Pages"], include_in_schema=False)


@router.get("/", response_class=HTMLResponse)
async def post_list_page(
    request: Request,
    service: PostService = Depends(get_post_service),
) -> HTMLResponse:
    """Grid of every post: title, snippet, status chip, category chip, date."""
    try:
        posts = await service.list_posts()
    except UnhandledStoreError as e:
        return templates.TemplateResponse(
            request,
            "index.html",
            {"posts": [], "error": f"Failed to load posts ({e.message})"},
            status_code=500,
        )
    return templates.TemplateResponse(request, "index.html", {"posts": posts, "error": None})


@router.get("/posts/{record_id}", response_class=HTMLResponse)
async def post_detail_page(
    request: Request,
    record_id: str,
    service: PostService = Depends(get_post_service),
) -> HTMLResponse:
    try:
        post = await service.get_post(parse_record_id(record_id))
    except (ValidationError, NotFoundError):
        return templates.TemplateResponse(request, "not_found.html", {}, status_code=404)
    except UnhandledStoreError as e:
        return templates.TemplateResponse(
            request,
            "error.html",
            {"error": f"Failed to load post ({e.message})"},
            status_code=500,
        )
    return templates.TemplateResponse(request, "post_detail.html", {"post": post})
