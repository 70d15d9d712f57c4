"""Library configuration.

FieldsConfig is a frozen dataclass. The active instance lives in a
ContextVar so an application (or a test) can scope a configuration to
a block without touching global state::

    with use_config(FieldsConfig(verbose=True)):
        headers = Headers(pairs)  # duplicate names are logged
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True, slots=True)
class FieldsConfig:
    """Configuration consulted by ``Headers`` and the accessors.

    ``verbose`` only controls diagnostics; it never changes results.
    """

    # Diagnostics for duplicate and None values during Headers.initialize()
    verbose: bool = False

    # Default record separator for set_form_data()
    form_separator: str = "&"

    @classmethod
    def from_env(cls) -> FieldsConfig:
        """Build a config from ``HTTPFIELDS_*`` environment variables."""
        verbose = os.environ.get("HTTPFIELDS_VERBOSE", "").strip().lower() in _TRUTHY
        separator = os.environ.get("HTTPFIELDS_FORM_SEPARATOR", "") or "&"
        return cls(verbose=verbose, form_separator=separator)


config_var: ContextVar[FieldsConfig] = ContextVar("httpfields_config")
"""The active configuration. Unset means ``FieldsConfig()``."""


def get_config() -> FieldsConfig:
    """Return the active configuration."""
    try:
        return config_var.get()
    except LookupError:
        return FieldsConfig()


@contextmanager
def use_config(config: FieldsConfig) -> Iterator[FieldsConfig]:
    """Install *config* for the duration of the ``with`` block."""
    token = config_var.set(config)
    try:
        yield config
    finally:
        config_var.reset(token)
