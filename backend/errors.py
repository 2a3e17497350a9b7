"""
Errors raised by the Kubernetes query layer.
"""
from typing import Optional

from kubernetes.client.rest import ApiException


UNAUTHORIZED = "unauthorized"
NOT_FOUND = "not_found"
API_ERROR = "api_error"
UNAVAILABLE = "unavailable"
MALFORMED = "malformed"


class QueryError(Exception):
    """A read-only query against the cluster failed or returned nothing usable."""

    def __init__(self, kind: str, operation: str, message: str, status: Optional[int] = None):
        super().__init__(f"{operation} failed ({kind}): {message}")
        self.kind = kind
        self.operation = operation
        self.message = message
        self.status = status

    @classmethod
    def from_api_exception(cls, operation: str, exc: ApiException) -> "QueryError":
        if exc.status in (401, 403):
            kind = UNAUTHORIZED
        elif exc.status == 404:
            kind = NOT_FOUND
        else:
            kind = API_ERROR
        return cls(kind, operation, exc.reason or str(exc), status=exc.status)
