"""Error taxonomy for the relay"""
from enum import Enum
from typing import Optional


class RelayErrorKind(str, Enum):
    """Where a completion failed"""
    REQUEST_BUILD = "request_build"
    UPSTREAM_UNREACHABLE = "upstream_unreachable"
    UPSTREAM_STATUS = "upstream_status"
    RESPONSE_DECODE = "response_decode"


class RelayError(Exception):
    """
    Failure of a single completion call.

    Args:
        kind: Which step failed
        message: Human readable summary
        cause: Underlying exception, if any
        status_code: Upstream HTTP status (UPSTREAM_STATUS only)
        body: Raw upstream body text (UPSTREAM_STATUS only)
    """

    def __init__(
        self,
        kind: RelayErrorKind,
        message: str,
        cause: Optional[BaseException] = None,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        self.kind = kind
        self.message = message
        self.cause = cause
        self.status_code = status_code
        self.body = body
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message

    def __repr__(self) -> str:
        return f"RelayError(kind={self.kind.value!r}, message={str(self)!r})"
