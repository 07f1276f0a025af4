"""ContextVar-based diff configuration for markdiff.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Config is set once per Differ call, read by the differ's input validation.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    # In Differ class
    differ = Differ(max_nesting_depth=16)
    text = differ(old, new)  # Sets config internally via ContextVar

    # Or use the context manager
    with diff_config_context(DiffConfig(max_nesting_depth=16)):
        text = paired_inline_diff(old, new)

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DiffConfig:
    """Immutable diff configuration.

    Attributes:
        paired: Use the inline-aware paired diff (True) or the coarse
            whole-block diff (False) when a caller does not choose.
        max_nesting_depth: Reject inputs whose quote/list nesting is deeper
            than this. None disables the check.

    """

    paired: bool = True
    max_nesting_depth: int | None = None

    @classmethod
    def from_dict(cls, config_dict: dict) -> "DiffConfig":
        """Create DiffConfig from dictionary.

        Only includes keys that are valid DiffConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = DiffConfig.from_dict({
            ...     "max_nesting_depth": 8,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.max_nesting_depth
            8

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: DiffConfig = DiffConfig()

_diff_config: ContextVar[DiffConfig] = ContextVar(
    "diff_config",
    default=_DEFAULT_CONFIG,
)


def get_diff_config() -> DiffConfig:
    """Get current diff configuration (thread-local)."""
    return _diff_config.get()


def set_diff_config(config: DiffConfig) -> None:
    """Set diff configuration for current context.

    Only affects the current thread's context. Other threads are unaffected.

    """
    _diff_config.set(config)


def reset_diff_config() -> None:
    """Reset to the module-level default configuration."""
    _diff_config.set(_DEFAULT_CONFIG)


@contextmanager
def diff_config_context(config: DiffConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with diff_config_context(DiffConfig(max_nesting_depth=4)):
        ...     text = paired_inline_diff(old, new)
        >>> # Automatically reset to previous config

    """
    previous = _diff_config.get()
    _diff_config.set(config)
    try:
        yield
    finally:
        _diff_config.set(previous)


__all__ = [
    "DiffConfig",
    "get_diff_config",
    "set_diff_config",
    "reset_diff_config",
    "diff_config_context",
]
