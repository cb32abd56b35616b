"""Executor and request interfaces following Black Box Design principles."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Protocol, Union


class ExecutorType(str, Enum):
    """Kinds of executors a module can hand to the host pipeline."""
    REQUEST_HANDLER = "request_handler"
    SERVICE = "service"


@dataclass(frozen=True)
class ExecutorInfo:
    """Registry metadata for a named executor."""
    name: str
    type: ExecutorType


class Request(Protocol):
    """
    Inbound request as seen by a request handler.

    Owned by the caller. Handlers read ``header`` and set ``auth``.
    """
    header: Mapping[str, str]
    auth: Optional[Dict[str, Any]]


@dataclass
class HttpRequest:
    """Minimal concrete request carrying headers and the auth context."""
    header: Dict[str, str] = field(default_factory=dict)
    auth: Optional[Dict[str, Any]] = None


class RequestHandler(Protocol):
    """Protocol for request-handling executors."""

    name: str
    type: ExecutorType

    async def handler(self, request: Request) -> Request:
        """
        Process an inbound request.

        Args:
            request: Request to inspect and annotate

        Returns:
            The same request, possibly annotated
        """
        ...


class TokenSigner(Protocol):
    """Protocol for token-issuing services."""

    name: str
    type: ExecutorType

    async def sign(
        self,
        payload: Dict[str, Any],
        jwt_secret: Optional[Union[str, bytes]] = None,
        jwt_sign_options: Optional[Dict[str, Any]] = None
    ) -> str:
        """
        Issue a signed token.

        Returns:
            Compact JWS string
        """
        ...
