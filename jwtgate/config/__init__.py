"""Host configuration lookup for jwtgate executors."""

from .provider import (
    ConfigProvider,
    DictConfigProvider,
    EnvConfigProvider,
    ExecutorConfig,
)

__all__ = ["ConfigProvider", "DictConfigProvider", "EnvConfigProvider", "ExecutorConfig"]
