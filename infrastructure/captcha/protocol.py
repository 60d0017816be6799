"""CaptchaProvider protocol and verification result types.

Services depend on this, not the concrete implementation. A verification
attempt ends in exactly one of three ways, and callers branch on the type:

- TransportFailure: the service could not be reached (connect error, timeout)
- MalformedResponse: the service answered, but not with a usable verdict
- VerificationOutcome: the service's boolean verdict
"""

from dataclasses import dataclass
from typing import Protocol, Union


@dataclass(frozen=True)
class VerificationOutcome:
    success: bool


@dataclass(frozen=True)
class TransportFailure:
    error: str


@dataclass(frozen=True)
class MalformedResponse:
    detail: str


VerificationResult = Union[VerificationOutcome, TransportFailure, MalformedResponse]


class CaptchaProvider(Protocol):
    @property
    def configured(self) -> bool: ...

    async def verify(self, response: str) -> VerificationResult: ...
