"""
Secret resolution shared by the JWT authenticator and signer.

This module is a black box that:
- Picks key material from the executor config, a cert/key file or the host config
- Reads each source at most once per resolver
- Serializes concurrent first resolutions into one in-flight lookup
"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .errors import ErrorKind, JwtError
from ...config.provider import JWT_CERT, JWT_SECRET, ConfigProvider

logger = logging.getLogger(__name__)

Secret = Union[str, bytes]


@dataclass(frozen=True)
class ResolvedSecret:
    """Key material and options resolved for one executor."""
    secret: Secret
    options: Optional[Dict[str, Any]]


def _read_file(path: Union[str, Path]) -> bytes:
    return Path(path).read_bytes()


class SecretResolver:
    """
    Resolves the secret and options for one executor instance.

    Secret sources in priority order:
    1. Inline secret from the executor config
    2. Cert/key file path from the executor config
    3. Host configuration (``jwtCert`` path first, then ``jwtSecret``)

    Once a secret is resolved it is kept for the lifetime of the
    resolver. Failures are not cached.
    """

    def __init__(
        self,
        config_provider: Optional[ConfigProvider],
        options_key: str,
        jwt_secret: Optional[Secret] = None,
        jwt_cert: Optional[str] = None,
        options: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize resolver with injected host configuration.

        Args:
            config_provider: Host configuration lookup, None for no host config
            options_key: Host config key holding the options for this executor
            jwt_secret: Inline secret
            jwt_cert: Path of a cert/key file whose contents become the secret
            options: Explicit verify/sign options
        """
        self.config_provider = config_provider
        self.options_key = options_key

        self._secret: Optional[Secret] = jwt_secret or None
        # An inline secret wins, so a cert path given next to it is never pending
        self._cert_path: Optional[str] = None if self._secret else (jwt_cert or None)
        self._options = options
        self._options_resolved = options is not None
        # Shared by every caller while the first secret lookup runs
        self._inflight: Optional["asyncio.Task[Secret]"] = None

    @property
    def cert_path(self) -> Optional[str]:
        """Cert/key file path still waiting to be read."""
        return self._cert_path

    @property
    def is_resolved(self) -> bool:
        return bool(self._secret)

    async def resolve(self) -> ResolvedSecret:
        """
        Resolve secret and options.

        Raises:
            JwtError: NO_SECRET_CONFIGURED or SECRET_FILE_UNREADABLE
        """
        secret = await self.resolve_secret()
        options = await self.resolve_options()
        return ResolvedSecret(secret=secret, options=options)

    async def resolve_secret(self) -> Secret:
        """
        Resolve the secret, joining a lookup already in flight.

        Concurrent callers all await one lookup and see the same secret
        or the same error. A failed lookup is forgotten once it ends.
        """
        if self._secret:
            return self._secret

        if self._inflight is None:
            self._inflight = asyncio.ensure_future(self._resolve_and_store())
            self._inflight.add_done_callback(self._clear_inflight)

        # One caller being cancelled must not cancel the shared lookup
        return await asyncio.shield(self._inflight)

    async def resolve_options(self) -> Optional[Dict[str, Any]]:
        if not self._options_resolved:
            self._options = self._host_config(self.options_key)
            self._options_resolved = True
        return self._options

    async def _resolve_and_store(self) -> Secret:
        secret = await self._resolve_secret_once()
        self._secret = secret
        return secret

    def _clear_inflight(self, task: "asyncio.Task[Secret]") -> None:
        if self._inflight is task:
            self._inflight = None
        if not task.cancelled():
            # Waiters that were cancelled never retrieve the error
            task.exception()

    async def _resolve_secret_once(self) -> Secret:
        if self._cert_path:
            return await self._load_cert(self._cert_path, "executor config")

        cert_path = self._host_config(JWT_CERT)
        if cert_path:
            return await self._load_cert(cert_path, "host configuration")

        secret = self._host_config(JWT_SECRET)
        if secret:
            logger.info("Resolved jwt secret from host configuration")
            return secret

        logger.error("No jwt secret available from executor config, cert file or host configuration")
        raise JwtError(ErrorKind.NO_SECRET_CONFIGURED)

    async def _load_cert(self, path: str, source: str) -> bytes:
        try:
            data = await asyncio.to_thread(_read_file, path)
        except OSError as e:
            logger.error(f"Failed to read jwt cert file {path} from {source}: {e}")
            raise JwtError(
                ErrorKind.SECRET_FILE_UNREADABLE,
                f"Jwt cert file {path!r} could not be read.",
                cause=e
            ) from e

        if not data:
            logger.error(f"Jwt cert file {path} from {source} is empty")
            raise JwtError(ErrorKind.NO_SECRET_CONFIGURED, f"Jwt cert file {path!r} is empty.")

        self._cert_path = None
        logger.info(f"Loaded jwt secret from cert file ({source})")
        return data

    def _host_config(self, key: str) -> Optional[Any]:
        if self.config_provider is None:
            return None
        return self.config_provider.get_config(key)
