"""ContextVar-based parse configuration for SmartScript.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Config is set once per parse context and read by every Parser created in it.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    from smartscript.config import ParseConfig, parse_config_context

    with parse_config_context(ParseConfig(max_nesting_depth=8)):
        document = Parser(source).document

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Note: source_file is excluded: it is per-call state,
    not configuration. It remains on the Parser instance.

    Attributes:
        max_nesting_depth: Maximum number of FOR blocks open at once.
            None (the default) enforces no bound.

    """

    max_nesting_depth: int | None = None

    def __post_init__(self) -> None:
        if self.max_nesting_depth is not None and self.max_nesting_depth < 0:
            raise ValueError(
                f"max_nesting_depth must be non-negative, got {self.max_nesting_depth}"
            )

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ParseConfig":
        """Create ParseConfig from dictionary.

        Only includes keys that are valid ParseConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = ParseConfig.from_dict({
            ...     "max_nesting_depth": 4,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.max_nesting_depth
            4

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ParseConfig = ParseConfig()

# Thread-local configuration via ContextVar
_parse_config: ContextVar[ParseConfig] = ContextVar(
    "smartscript_parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get current parse configuration (thread-local)."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for current context.

    Only affects the current thread's context. Other threads are unaffected.
    """
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to default configuration."""
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config on exit, even if an exception is raised.

    Example:
        >>> with parse_config_context(ParseConfig(max_nesting_depth=1)):
        ...     parser = Parser(source)  # nested FOR blocks raise ParserError
        >>> # Automatically reset to previous config

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
]
