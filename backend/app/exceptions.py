"""
Blog Backend - Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions, one per error class the API reports.
How:   Each exception carries a client-facing message, an optional context
       dict for server-side logs, and the HTTP status it maps to.
       Global exception handlers (registered in main.py) render them as
       {"error": message}.
Who:   Raised by services (directly, or via results.unwrap() when a store
       operation did not succeed); caught by the global handlers.
When:  During request processing. None of them is fatal to the process.

Exception Hierarchy:
    BlogError (base)
    ├── ValidationError          → 400 (missing required field, malformed id)
    ├── NotFoundError            → 404 (no matching record)
    ├── ConflictError            → 400 (unique constraint violated)
    ├── ReferenceViolationError  → 400 (dangling foreign key)
    ├── UnhandledStoreError      → 500 (anything else the store reported)
    └── MethodNotAllowedError    → 405 (verb not served by the resource)
"""

from typing import Any, Dict, Optional, Sequence


class BlogError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:     Client-facing error description, returned as {"error": message}
        context:     Additional debug info (logged, never returned)
        status_code: HTTP status the global handler responds with
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "Server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(BlogError):
    """
    Raised when client input fails a presence check or the path id is malformed.

    Examples:
        {"error": "Invalid id"}
        {"error": "Title is required"}
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(BlogError):
    """
    Raised when the store reports no record for the requested id.

    Message format: "<Entity> not found", e.g. "Post not found".
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)
        self.resource = resource


class ConflictError(BlogError):
    """
    Raised when a create/update violates a uniqueness constraint.

    HTTP 400 (not 409), matching the API's published contract.
    """

    status_code = 400

    def __init__(
        self,
        resource: str = "Resource",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=f"{resource} with this name already exists",
            context=context,
        )


class ReferenceViolationError(BlogError):
    """Raised when a post points at a category that does not exist."""

    status_code = 400

    def __init__(
        self,
        message: str = "Category not found",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UnhandledStoreError(BlogError):
    """
    Raised for any store failure that is not one of the classified outcomes.

    The store's own message is passed through to the client; an empty message
    falls back to "Server error".
    """

    status_code = 500

    def __init__(
        self,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message or "Server error", context=context)


class MethodNotAllowedError(BlogError):
    """
    Raised by a resource for a verb it does not serve.

    Rendered as plain-text "Method Not Allowed" with an Allow header listing
    `allowed`, in the resource's own order.
    """

    status_code = 405

    def __init__(
        self,
        allowed: Sequence[str],
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message="Method Not Allowed", context=context)
        self.allowed = list(allowed)
