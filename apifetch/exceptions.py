"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Apifetch, a product of Garudex Labs

Exception hierarchy for Apifetch.

All custom exceptions inherit from ApifetchError base class.
"""

from typing import Optional
from urllib.parse import unquote


class ApifetchError(Exception):
    """Base exception for all Apifetch errors."""
    pass


# Request Errors
class RequestError(ApifetchError):
    """
    Structured error raised for every failed request.

    Covers two paths:
    - the transport completed but the response was not successful
      (``status``, ``message`` and ``response_body`` come from the response);
    - the transport itself failed (``status`` and ``response_body`` are None,
      the underlying exception is kept in ``wrapped_error``).

    Use ``from_response`` and ``from_transport_failure`` rather than the
    constructor directly.

    Attributes:
        kind: Fixed classification tag, always ``"REQUEST_ERROR"``
        method: HTTP method of the failed request
        resource: Request URL with percent-encoding reversed
        request_timestamp: ISO-8601 time captured just before the transport call
        status: HTTP status code, or None on transport failure
        message: Response status text, or a transport failure description
        response_body: Response body rendered as text, or None
        wrapped_error: Underlying exception on the transport failure path
    """

    kind = "REQUEST_ERROR"

    def __init__(
        self,
        method: str,
        resource: str,
        request_timestamp: str,
        status: Optional[int],
        message: str,
        response_body: Optional[str] = None,
        wrapped_error: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.method = str(method)
        self.resource = unquote(resource)
        self.request_timestamp = request_timestamp
        self.status = status
        self.message = message
        self.response_body = response_body
        self.wrapped_error = wrapped_error
        if wrapped_error is not None:
            self.__cause__ = wrapped_error

    @classmethod
    def from_response(
        cls,
        method: str,
        resource: str,
        request_timestamp: str,
        status: int,
        status_text: str,
        response_body: str,
    ) -> "RequestError":
        """Build the error for a completed request with a non-success status."""
        return cls(
            method=method,
            resource=resource,
            request_timestamp=request_timestamp,
            status=status,
            message=status_text,
            response_body=response_body,
        )

    @classmethod
    def from_transport_failure(
        cls,
        method: str,
        resource: str,
        request_timestamp: str,
        cause: BaseException,
    ) -> "RequestError":
        """Build the error for a request the transport could not complete."""
        return cls(
            method=method,
            resource=resource,
            request_timestamp=request_timestamp,
            status=None,
            message=f"Transport failure: {cause}",
            response_body=None,
            wrapped_error=cause,
        )

    @property
    def is_transport_failure(self) -> bool:
        """Whether the request failed before any response was received."""
        return self.status is None

    @property
    def is_rate_limited(self) -> bool:
        """Whether the server answered with 429 Too Many Requests."""
        return self.status == 429

    def to_dict(self) -> dict:
        """Convert the error to a dictionary for structured logging."""
        return {
            "kind": self.kind,
            "method": self.method,
            "resource": self.resource,
            "request_timestamp": self.request_timestamp,
            "status": self.status,
            "message": self.message,
            "response_body": self.response_body,
            "wrapped_error": repr(self.wrapped_error) if self.wrapped_error else None,
        }

    def __repr__(self) -> str:
        return (
            f"RequestError(method={self.method!r}, resource={self.resource!r}, "
            f"status={self.status!r}, message={self.message!r})"
        )


class TransportError(ApifetchError):
    """Raised by a transport when the network exchange could not complete."""
    pass


class ResponseConsumedError(ApifetchError):
    """Raised when a response body is read a second time."""
    pass


# Configuration Errors
class ConfigurationError(ApifetchError):
    """Base exception for configuration-related errors."""
    pass


class InvalidConfigurationError(ConfigurationError):
    """Raised when configuration is invalid or malformed."""
    pass
