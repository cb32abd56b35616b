"""
JWT token signer.

Issues compact JWS tokens for outbound use. Not a request handler:
failures propagate to the caller of sign() as JwtError values.
"""

import logging
import time
from datetime import timedelta
from typing import Any, Dict, Mapping, Optional, Union

import jwt

from .errors import ErrorKind, JwtError
from .interfaces import ExecutorType
from .secret_resolver import Secret, SecretResolver
from ...config.provider import JWT_SIGN_OPTIONS, ConfigProvider, ExecutorConfig

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "HS256"

# Sign options that set a registered claim directly
_CLAIM_OPTIONS = {
    "audience": "aud",
    "issuer": "iss",
    "subject": "sub",
    "jwt_id": "jti",
}

# Sign options that set a registered claim relative to the issue time
_RELATIVE_TIME_OPTIONS = {
    "expires_in": "exp",
    "not_before": "nbf",
}


def _seconds(option: str, value: Union[int, float, timedelta]) -> int:
    if isinstance(value, timedelta):
        return int(value.total_seconds())
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f'"{option}" should be a number of seconds or a timedelta')
    return int(value)


def build_claims(payload: Dict[str, Any], options: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge claim-shaping sign options into a copy of the payload.

    Claim options are removed from ``options``; what remains is handed
    to ``jwt.encode``.

    Raises:
        TypeError: If the payload is not a dict
        ValueError: If an option conflicts with the payload or is invalid
    """
    if not isinstance(payload, dict):
        raise TypeError(f"Expecting a dict payload, got {type(payload).__name__}")

    claims = dict(payload)
    no_timestamp = bool(options.pop("no_timestamp", False))
    timestamp = claims["iat"] if "iat" in claims else int(time.time())

    if no_timestamp:
        claims.pop("iat", None)
    else:
        claims["iat"] = timestamp

    for option, claim in _RELATIVE_TIME_OPTIONS.items():
        if option not in options:
            continue
        value = options.pop(option)
        if claim in claims:
            raise ValueError(f'"{option}" option conflicts with the payload "{claim}" claim')
        claims[claim] = timestamp + _seconds(option, value)

    for option, claim in _CLAIM_OPTIONS.items():
        if option not in options:
            continue
        value = options.pop(option)
        if claim in claims:
            raise ValueError(f'"{option}" option conflicts with the payload "{claim}" claim')
        claims[claim] = value

    return claims


class JwtSigner:
    """
    Issues signed tokens for arbitrary payloads.

    The instance secret and sign options are resolved lazily through a
    SecretResolver; per-call overrides bypass it for that call only.
    """

    name: str = "JwtSigner"
    type: ExecutorType = ExecutorType.SERVICE

    def __init__(
        self,
        config: Optional[Mapping[str, Any]] = None,
        config_provider: Optional[ConfigProvider] = None
    ):
        executor_config = ExecutorConfig.from_mapping(config)
        self.resolver = SecretResolver(
            config_provider,
            JWT_SIGN_OPTIONS,
            jwt_secret=executor_config.jwt_secret,
            jwt_cert=executor_config.jwt_cert,
            options=executor_config.jwt_sign_options
        )

    async def sign(
        self,
        payload: Dict[str, Any],
        jwt_secret: Optional[Secret] = None,
        jwt_sign_options: Optional[Dict[str, Any]] = None
    ) -> str:
        """
        Sign a payload.

        Args:
            payload: Claims to encode
            jwt_secret: Secret for this call only, bypassing resolution
            jwt_sign_options: Sign options for this call only

        Returns:
            Encoded token

        Raises:
            JwtError: NO_SECRET_CONFIGURED when no secret is available,
                SIGNING_FAILED when the payload or options are rejected or
                the cert file cannot be read
        """
        if jwt_secret is None:
            try:
                jwt_secret = await self.resolver.resolve_secret()
            except JwtError as e:
                if e.kind is ErrorKind.SECRET_FILE_UNREADABLE:
                    raise JwtError(ErrorKind.SIGNING_FAILED, e.message, cause=e) from e
                raise

        if jwt_sign_options is None:
            jwt_sign_options = await self.resolver.resolve_options()

        if not jwt_secret:
            raise JwtError(ErrorKind.NO_SECRET_CONFIGURED)

        options = dict(jwt_sign_options or {})
        try:
            claims = build_claims(payload, options)
            options.setdefault("algorithm", DEFAULT_ALGORITHM)
            token = jwt.encode(claims, jwt_secret, **options)
        except (jwt.PyJWTError, NotImplementedError, TypeError, ValueError) as e:
            logger.warning(f"Jwt signing failed: {e}")
            raise JwtError(ErrorKind.SIGNING_FAILED, f"Jwt signing failed: {e}", cause=e) from e
        except Exception as e:
            logger.error(f"Unexpected error signing jwt: {e!r}")
            raise JwtError(ErrorKind.SIGNING_FAILED, f"Jwt signing failed: {e!r}", cause=e) from e

        logger.debug(f"Signed jwt with {options['algorithm']}")
        return token
