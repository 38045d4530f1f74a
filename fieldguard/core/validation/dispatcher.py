"""
Per-request validation dispatch.

The dispatcher walks every registered field, pulls its value from the
request through a RequestFieldAccessor, runs the field's validator chain and
stops at the first failure. When every present value passes, the request is
handed to the next stage untouched.

Keys are visited in the order they were first registered. Only the first
failure is reported; later fields are not examined once a response has been
produced.
"""

import logging
from typing import Awaitable, Callable, Mapping, Optional, Protocol, Tuple

from fastapi import status
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response

from fieldguard.schemas.common import ErrorResponse, FieldErrorResponse

from .errors import QueryParseError, ValidationError, ValidationErrorType
from .registry import FieldKey, FieldSource, ValidatorFn, ValidatorRegistry

logger = logging.getLogger(__name__)

CallNext = Callable[[Request], Awaitable[Response]]


class RequestFieldAccessor(Protocol):
    """Read access to the four request-data sources."""

    def path_param(self, name: str) -> Optional[str]:
        ...

    def query_params(self) -> Mapping[str, str]:
        """Decode the whole query string; raises QueryParseError."""
        ...

    def header(self, name: str) -> Optional[str]:
        ...

    def cookie(self, name: str) -> Optional[str]:
        ...


class ValidationDispatcher:
    """
    Runs registered validator chains against a request.

    The registry is snapshotted on construction, so registrations made
    afterwards do not affect this dispatcher. The snapshot is shared by all
    in-flight requests and never mutated.
    """

    def __init__(self, registry: ValidatorRegistry):
        self.chains: Mapping[FieldKey, Tuple[ValidatorFn, ...]] = registry.snapshot()

    async def dispatch(
        self,
        request: Request,
        call_next: CallNext,
        accessor: RequestFieldAccessor,
    ) -> Response:
        """
        Validate the request, then either reject it or forward it.

        Args:
            request: The incoming request
            call_next: The next stage in the handler chain
            accessor: Field accessor bound to the request

        Returns:
            The error response, or the downstream response unchanged
        """
        rejection = self.check(accessor)
        if rejection is not None:
            return rejection
        return await call_next(request)

    def check(self, accessor: RequestFieldAccessor) -> Optional[Response]:
        """
        Run one validation pass.

        Returns:
            A terminal error response, or None when the request may proceed
        """
        query_params: Optional[Mapping[str, str]] = None

        for key, chain in self.chains.items():
            if key.source is FieldSource.QUERY_PARAM:
                if query_params is None:
                    try:
                        query_params = accessor.query_params()
                    except QueryParseError as e:
                        return self._query_parse_failure(e)
                value = query_params.get(key.name)
            elif key.source is FieldSource.PATH_PARAM:
                value = accessor.path_param(key.name)
            elif key.source is FieldSource.HEADER:
                value = accessor.header(key.name)
            else:
                value = accessor.cookie(key.name)

            if value is None:
                logger.debug(f"Skipping {key}: not present on request")
                continue

            rejection = self._run_chain(key, chain, value)
            if rejection is not None:
                return rejection

        return None

    def _run_chain(self, key: FieldKey, chain: Tuple[ValidatorFn, ...], value: str) -> Optional[Response]:
        for validator in chain:
            try:
                validator(value)
            except ValidationError as e:
                logger.info(f"Rejected {key} with status {e.status_code}: {e.message}")
                return self._validation_failure(key, e)
            except Exception as e:
                logger.error(
                    f"Validator {getattr(validator, '__name__', repr(validator))} for {key} "
                    f"raised {type(e).__name__}: {e}",
                    exc_info=True
                )
                return self._validator_fault(key, e)
        return None

    def _validation_failure(self, key: FieldKey, error: ValidationError) -> Response:
        """Encode a validator rejection, degrading to plain text if encoding fails."""
        try:
            body = FieldErrorResponse(
                message=error.message,
                error_code=error.error_code,
                status_code=error.status_code,
                source=key.source.value,
                field=key.name,
                details=error.details or None,
            )
            return JSONResponse(status_code=error.status_code, content=body.model_dump(mode="json"))
        except (TypeError, ValueError) as e:
            logger.warning(f"Cannot serialize validation error for {key}: {e}")
            return PlainTextResponse(
                f"cannot serialize your {key.source.value} validator error for '{key.name}': {e}",
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

    def _query_parse_failure(self, error: QueryParseError) -> Response:
        logger.warning(f"Cannot read query parameters: {error.message}")
        body = ErrorResponse(
            message=f"cannot read query parameters: {error.message}",
            error_code=error.error_code,
            details=error.details or None,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=body.model_dump(mode="json"),
        )

    def _validator_fault(self, key: FieldKey, error: Exception) -> Response:
        body = ErrorResponse(
            message=f"validator for '{key.name}' failed: {type(error).__name__}",
            error_code=ValidationErrorType.VALIDATOR_FAULT.value.upper(),
            details={"source": key.source.value, "field": key.name},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=body.model_dump(mode="json"),
        )
