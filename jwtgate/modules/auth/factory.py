"""
JWT executor registry following Black Box Design principles.

This module:
- Maps symbolic executor names to constructors
- Wires the host configuration provider into each executor
- Returns None for names it does not know
"""

import logging
from typing import Any, Callable, Dict, Mapping, Optional, Union

from .authenticator import JwtAuthenticator
from .interfaces import ExecutorInfo, ExecutorType, RequestHandler, TokenSigner
from .signer import JwtSigner
from ...config.provider import ConfigProvider

logger = logging.getLogger(__name__)

Executor = Union[RequestHandler, TokenSigner]
ExecutorConstructor = Callable[[Optional[Mapping[str, Any]], Optional[ConfigProvider]], Executor]


class JwtModule:
    """
    Registry exposing the JWT executors to a host pipeline.

    This is the composition root that:
    - Declares which executors exist and their types
    - Builds a fresh executor per configuration
    """

    _constructors: Dict[str, ExecutorConstructor] = {
        "Authenticator": JwtAuthenticator,
        "Signer": JwtSigner,
        JwtAuthenticator.name: JwtAuthenticator,
        JwtSigner.name: JwtSigner,
    }

    def __init__(self, config_provider: Optional[ConfigProvider] = None):
        """
        Initialize registry.

        Args:
            config_provider: Host configuration handed to every executor built
        """
        self.config_provider = config_provider
        self.executor_infos: Dict[str, ExecutorInfo] = {
            name: ExecutorInfo(name=name, type=constructor.type)
            for name, constructor in self._constructors.items()
        }

    def get_executor(
        self,
        name: str,
        config: Optional[Mapping[str, Any]] = None
    ) -> Optional[Executor]:
        """
        Build the executor registered under ``name``.

        Args:
            name: Symbolic executor name
            config: Executor config bag

        Returns:
            A new executor, or None if the name is not registered
        """
        constructor = self._constructors.get(name)
        if constructor is None:
            logger.debug(f"No jwt executor registered as {name!r}")
            return None

        logger.info(f"Building jwt executor {name!r}")
        return constructor(config, self.config_provider)

    def executors_of_type(self, executor_type: ExecutorType) -> Dict[str, ExecutorInfo]:
        """Registered executors of one type."""
        return {
            name: info for name, info in self.executor_infos.items()
            if info.type is executor_type
        }
