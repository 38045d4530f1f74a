"""
Request Field Validation Middleware for FastAPI/Starlette applications.

This module binds the validation dispatcher to Starlette requests. Two
installation forms are provided:

- FieldValidationMiddleware: application-wide, added with app.add_middleware
- validated_route_class: per-router, passed as APIRouter(route_class=...)

Both read path parameters, query parameters, headers and cookies only; the
request body is never consumed.
"""

import logging
from typing import Any, Callable, Dict, Mapping, Optional, Type
from urllib.parse import parse_qsl

from fastapi import FastAPI, Request, Response
from fastapi.routing import APIRoute
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.routing import Match
from starlette.types import ASGIApp, Scope

from fieldguard.core.validation import QueryParseError, ValidationDispatcher, ValidatorRegistry

logger = logging.getLogger(__name__)


def decode_query_string(query_string: bytes, strict: bool = False) -> Dict[str, str]:
    """
    Decode a raw query string into a name to value mapping.

    Args:
        query_string: Raw query string bytes from the ASGI scope
        strict: Reject empty fields such as "a&&b" and names without "=";
            otherwise empty fields are dropped and a bare "flag" maps to ""

    Returns:
        Mapping of parameter names to values; the last value wins for
        repeated names

    Raises:
        QueryParseError: If the query string cannot be decoded
    """
    text = query_string.decode("latin-1")
    try:
        pairs = parse_qsl(
            text,
            keep_blank_values=True,
            strict_parsing=strict,
            encoding="utf-8",
            errors="strict",
        )
    except ValueError as e:
        raise QueryParseError(str(e), query_string=text) from e
    return dict(pairs)


def _match_path_params(routes, scope: Scope) -> Optional[Dict[str, Any]]:
    for route in routes:
        match, child_scope = route.matches(scope)
        if match != Match.FULL:
            continue
        path_params = dict(child_scope.get("path_params", {}))
        nested_routes = getattr(route, "routes", None)
        if nested_routes:
            nested = _match_path_params(nested_routes, {**scope, **child_scope})
            if nested is None:
                continue
            path_params.update(nested)
        return path_params
    return None


def resolve_path_params(request: Request) -> Dict[str, Any]:
    """
    Resolve path parameters for a request that has not been routed yet.

    Application middleware runs before routing, so the parameters are
    recovered by matching the request against the application's routes.
    """
    router = getattr(request.scope.get("app"), "router", None)
    if router is None:
        return {}
    return _match_path_params(router.routes, request.scope) or {}


class StarletteFieldAccessor:
    """Reads validatable fields from a Starlette request."""

    def __init__(
        self,
        request: Request,
        path_params: Optional[Mapping[str, Any]] = None,
        strict_query_parsing: bool = False
    ):
        self.request = request
        self.strict_query_parsing = strict_query_parsing
        self._path_params = path_params

    def path_param(self, name: str) -> Optional[str]:
        if self._path_params is None:
            self._path_params = self.request.path_params or resolve_path_params(self.request)
        value = self._path_params.get(name)
        return None if value is None else str(value)

    def query_params(self) -> Mapping[str, str]:
        return decode_query_string(
            self.request.scope.get("query_string", b""),
            strict=self.strict_query_parsing
        )

    def header(self, name: str) -> Optional[str]:
        return self.request.headers.get(name)

    def cookie(self, name: str) -> Optional[str]:
        return self.request.cookies.get(name)


class FieldValidationMiddleware(BaseHTTPMiddleware):
    """
    Validates request fields before they reach route handlers.

    The registry is snapshotted when the middleware is built; the first
    rejected field short-circuits the request with an error response.
    """

    def __init__(
        self,
        app: ASGIApp,
        registry: ValidatorRegistry,
        strict_query_parsing: bool = False
    ):
        super().__init__(app)
        self.dispatcher = ValidationDispatcher(registry)
        self.strict_query_parsing = strict_query_parsing
        logger.info(
            f"FieldValidationMiddleware initialized with {len(self.dispatcher.chains)} validated fields"
        )

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        accessor = StarletteFieldAccessor(request, strict_query_parsing=self.strict_query_parsing)
        return await self.dispatcher.dispatch(request, call_next, accessor)


def validated_route_class(
    registry: ValidatorRegistry,
    strict_query_parsing: bool = False
) -> Type[APIRoute]:
    """
    Build an APIRoute class that validates fields before calling the endpoint.

    Use it to scope validation to the routes of one router:

        router = APIRouter(route_class=validated_route_class(registry))

    Args:
        registry: Validators to apply; snapshotted now
        strict_query_parsing: Reject empty or "="-less query fields

    Returns:
        APIRoute subclass bound to the registry
    """
    dispatcher = ValidationDispatcher(registry)

    class ValidatedRoute(APIRoute):
        def get_route_handler(self) -> Callable:
            handler = super().get_route_handler()

            async def validated_handler(request: Request) -> Response:
                accessor = StarletteFieldAccessor(request, strict_query_parsing=strict_query_parsing)
                return await dispatcher.dispatch(request, handler, accessor)

            return validated_handler

    return ValidatedRoute


def add_field_validation_middleware(
    app: FastAPI,
    registry: ValidatorRegistry,
    strict_query_parsing: bool = False
) -> None:
    """
    Add field validation middleware to FastAPI app.

    Args:
        app: FastAPI application instance
        registry: Validators to apply
        strict_query_parsing: Reject empty or "="-less query fields
    """
    app.add_middleware(
        FieldValidationMiddleware,
        registry=registry,
        strict_query_parsing=strict_query_parsing
    )
    logger.info("Field validation middleware added to application")
