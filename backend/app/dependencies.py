"""
Blog Backend - FastAPI Dependencies
=====================================

What:  Providers injected into route handlers with Depends().
How:   The BlogStore lives on app.state (set by create_app); services are
       built per request around it. Path ids arrive as strings and are
       parsed here so a malformed id yields 400 "Invalid id" instead of
       FastAPI's 422.
"""

from fastapi import Depends, Request

from app.exceptions import ValidationError
from app.services.category_service import CategoryService
from app.services.post_service import PostService
from app.services.store import BlogStore


def get_store(request: Request) -> BlogStore:
    """The application's single store handle."""
    return request.app.state.store


def get_category_service(store: BlogStore = Depends(get_store)) -> CategoryService:
    return CategoryService(store)


def get_post_service(store: BlogStore = Depends(get_store)) -> PostService:
    return PostService(store)


def parse_record_id(record_id: str) -> int:
    """
    Parse the {record_id} path segment as a positive integer.

    Only ASCII digits are accepted ("12", "007"); "abc", "0", "-1", "1.5"
    and "12abc" are all rejected.

    Raises:
        ValidationError: "Invalid id" (400)
    """
    if not (record_id.isascii() and record_id.isdigit()) or int(record_id) <= 0:
        raise ValidationError("Invalid id", field="id", context={"value": record_id})
    return int(record_id)


# ── Verbs per resource ────────────────────────────────────────────────────
# Each resource lists what it serves (the Allow header, in this order) and
# declares the rest explicitly so they reach a handler instead of the router.
COLLECTION_METHODS = ("GET", "POST")
ITEM_METHODS = ("GET", "PUT", "DELETE")

UNSUPPORTED_COLLECTION_METHODS = ["PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]
UNSUPPORTED_ITEM_METHODS = ["POST", "PATCH", "HEAD", "OPTIONS"]
