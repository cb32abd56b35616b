"""
JWT Middleware Module - Black Box Interface

Purpose: Run a JwtAuthenticator over FastAPI requests
Interface: JwtAuthMiddleware, create_jwt_auth_middleware()
Hidden: Header translation, error formatting
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from ..auth.authenticator import JwtAuthenticator
from ..auth.errors import Unauthorized
from ..auth.interfaces import HttpRequest

logger = logging.getLogger(__name__)

# JSON-RPC 2.0 reserves -32000 to -32099 for server-defined errors
JSONRPC_UNAUTHORIZED = -32001
JSONRPC_INTERNAL_ERROR = -32603


class JwtAuthMiddleware:
    """
    Bearer token middleware for FastAPI applications.

    Decoded claims are stored on ``request.state.auth``. Rejected
    requests get a 401 response and never reach the route.
    Skipped paths see ``request.state.auth`` set to None.
    """

    def __init__(
        self,
        authenticator: JwtAuthenticator,
        skip_paths: Optional[Dict[str, list]] = None,
        error_format: str = "json",
        log_attempts: bool = True
    ):
        """
        Initialize JWT authentication middleware.

        Args:
            authenticator: Authenticator run for each request
            skip_paths: Dict of {path: [methods]} to skip authentication
            error_format: Error response format ("json" or "jsonrpc")
            log_attempts: Whether to log authentication attempts
        """
        self.authenticator = authenticator
        self.skip_paths = skip_paths or {}
        self.error_format = error_format
        self.log_attempts = log_attempts

    def should_skip_auth(self, request: Request) -> bool:
        """Check if authentication should be skipped for this request."""
        path = str(request.url.path)
        method = request.method.upper()

        if path in self.skip_paths:
            allowed_methods = self.skip_paths[path]
            if "*" in allowed_methods or method in allowed_methods:
                return True

        return False

    def format_error(self, status_code: int, message: str, request_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Format error response based on configured format.

        JSON-RPC bodies carry a server-defined code for 401 and the
        internal error code for anything else.
        """
        if self.error_format == "jsonrpc":
            return {
                "jsonrpc": "2.0",
                "error": {
                    "code": JSONRPC_UNAUTHORIZED if status_code == 401 else JSONRPC_INTERNAL_ERROR,
                    "message": message
                },
                "id": request_id
            }
        return {
            "error": message,
            "status": status_code
        }

    async def __call__(self, request: Request, call_next):
        """Process the request through the authenticator."""
        if self.should_skip_auth(request):
            if self.log_attempts:
                logger.debug(f"Skipping auth for {request.method} {request.url.path}")
            request.state.auth = None
            return await call_next(request)

        # Starlette lower-cases header names
        pipeline_request = HttpRequest(header=dict(request.headers))

        try:
            await self.authenticator.handler(pipeline_request)
        except Unauthorized as e:
            if self.log_attempts:
                logger.warning(f"Unauthorized request to {request.url.path} ({e.kind.value})")
            return JSONResponse(
                status_code=e.status_code,
                content=self.format_error(e.status_code, "Authentication failed: " + e.message)
            )

        request.state.auth = pipeline_request.auth
        return await call_next(request)


def create_jwt_auth_middleware(
    authenticator: JwtAuthenticator,
    skip_paths: Optional[Dict[str, list]] = None,
    error_format: str = "json"
) -> JwtAuthMiddleware:
    """
    Factory function to create JWT authentication middleware.

    Args:
        authenticator: JwtAuthenticator instance
        skip_paths: Paths to skip authentication {"/path": ["GET", "POST"]}
        error_format: "json" or "jsonrpc" error format

    Returns:
        Configured JwtAuthMiddleware instance
    """
    default_skip_paths = {
        "/health": ["GET"],
        "/metrics": ["GET"],
    }

    if skip_paths:
        default_skip_paths.update(skip_paths)

    return JwtAuthMiddleware(
        authenticator=authenticator,
        skip_paths=default_skip_paths,
        error_format=error_format
    )
