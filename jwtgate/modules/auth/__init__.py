"""
JWT Authentication Module - Black Box Interface

Purpose: Verify bearer tokens on inbound requests and sign outbound tokens
Interface: JwtAuthenticator.handler(), JwtSigner.sign(), JwtModule.get_executor()
Hidden: Secret sources, resolution caching, PyJWT option mapping
"""

from .authenticator import JwtAuthenticator
from .errors import ErrorKind, JwtError, Unauthorized
from .factory import JwtModule
from .interfaces import ExecutorInfo, ExecutorType, HttpRequest
from .secret_resolver import ResolvedSecret, SecretResolver
from .signer import JwtSigner

__all__ = [
    "ErrorKind",
    "ExecutorInfo",
    "ExecutorType",
    "HttpRequest",
    "JwtAuthenticator",
    "JwtError",
    "JwtModule",
    "JwtSigner",
    "ResolvedSecret",
    "SecretResolver",
    "Unauthorized",
]
