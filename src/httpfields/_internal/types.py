"""Shared type aliases used across httpfields modules."""

from collections.abc import Iterable, Mapping
from typing import Any, TypeAlias

# A header value before expansion: a scalar, a sequence of values, or a
# mapping whose keys and values are all taken as values. Nested freely.
HeaderValue: TypeAlias = str | bytes | int | float | Iterable[Any] | Mapping[Any, Any] | None

# Bulk initializer for Headers: a mapping or an iterable of (name, value) pairs
HeaderFields: TypeAlias = Mapping[str, HeaderValue] | Iterable[tuple[str, HeaderValue]]

# Form parameters: a mapping or an iterable of (name, value[, options]) tuples
FormParams: TypeAlias = Mapping[str, Any] | Iterable[tuple[Any, ...]]
