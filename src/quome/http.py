"""HTTP transport for the Quome API."""

from __future__ import annotations
import logging
from collections.abc import Mapping
from types import TracebackType
from typing import Any, TypeVar, overload
import httpx
from pydantic import BaseModel, ValidationError
from quome import __version__
from quome.errors import (
    ApiError,
    InvalidResponseError,
    NotFoundError,
    QuomeError,
    RateLimitedError,
    TransportError,
    TransportTimeoutError,
    UnauthorizedError,
)


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
USER_AGENT = f"quome-cli/{__version__}"

ModelT = TypeVar("ModelT", bound=BaseModel)


def _error_message(payload: Any) -> str | None:
    if isinstance(payload, Mapping):
        message = payload.get("message")
        if isinstance(message, str) and message:
            return message
    return None


def classify_error(status_code: int, payload: Any = None) -> QuomeError:
    """Map a non-2xx status and its decoded body to an error instance."""
    message = _error_message(payload)
    if status_code == httpx.codes.UNAUTHORIZED:
        return UnauthorizedError()
    if status_code == httpx.codes.NOT_FOUND:
        return NotFoundError(message or "Resource not found")
    if status_code == httpx.codes.TOO_MANY_REQUESTS:
        return RateLimitedError()
    return ApiError(
        message or f"Request failed with status {status_code}",
        status_code=status_code,
    )


def _decode_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


class Transport:
    """Thin wrapper around ``httpx.Client`` with Quome defaults."""

    def __init__(
        self,
        token: str | None = None,
        *,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Create a client bound to ``base_url``, authenticated if a token is set."""
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            headers=headers,
            transport=transport,
        )

    def close(self) -> None:
        """Release the underlying HTTP resources."""
        self._client.close()

    def __enter__(self) -> Transport:
        """Return the transport for use in a ``with`` block."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        """Close the client when leaving a ``with`` block."""
        self.close()

    @overload
    def execute(
        self,
        method: str,
        path: str,
        *,
        body: BaseModel | None = ...,
        params: Mapping[str, Any] | None = ...,
        response_model: type[ModelT],
    ) -> ModelT: ...

    @overload
    def execute(
        self,
        method: str,
        path: str,
        *,
        body: BaseModel | None = ...,
        params: Mapping[str, Any] | None = ...,
        response_model: None = ...,
    ) -> None: ...

    def execute(
        self,
        method: str,
        path: str,
        *,
        body: BaseModel | None = None,
        params: Mapping[str, Any] | None = None,
        response_model: type[ModelT] | None = None,
    ) -> ModelT | None:
        """Send one request and return the parsed response model.

        Without ``response_model`` the response body is not read, which is
        what delete-style endpoints expect.
        """
        content = body.model_dump_json(exclude_none=True) if body is not None else None
        logger.info("API request %s %s", method, path)
        if params:
            logger.debug("API request params %s", dict(params))
        try:
            response = self._client.request(
                method, path, content=content, params=params
            )
        except httpx.TimeoutException as exc:
            logger.debug("API request %s %s timed out", method, path)
            raise TransportTimeoutError(
                f"Request to {self.base_url}{path} timed out"
            ) from exc
        except httpx.HTTPError as exc:
            logger.debug("API request %s %s failed: %s", method, path, exc)
            raise TransportError(f"Unable to reach {self.base_url}: {exc}") from exc

        logger.info("API response %s %s -> %s", method, path, response.status_code)
        if not response.is_success:
            raise classify_error(response.status_code, _decode_body(response))

        if response_model is None:
            return None
        try:
            return response_model.model_validate_json(response.content)
        except ValidationError as exc:
            raise InvalidResponseError(
                f"Invalid response from server for {method} {path}"
            ) from exc

    def get(
        self,
        path: str,
        response_model: type[ModelT],
        *,
        params: Mapping[str, Any] | None = None,
    ) -> ModelT:
        """Issue a ``GET`` request."""
        return self.execute("GET", path, params=params, response_model=response_model)

    def post(
        self, path: str, body: BaseModel, response_model: type[ModelT]
    ) -> ModelT:
        """Issue a ``POST`` request with a JSON body."""
        return self.execute("POST", path, body=body, response_model=response_model)

    def put(self, path: str, body: BaseModel, response_model: type[ModelT]) -> ModelT:
        """Issue a ``PUT`` request with a JSON body."""
        return self.execute("PUT", path, body=body, response_model=response_model)

    def delete(self, path: str) -> None:
        """Issue a ``DELETE`` request and ignore the response body."""
        self.execute("DELETE", path)


__all__ = ["DEFAULT_TIMEOUT", "USER_AGENT", "Transport", "classify_error"]
