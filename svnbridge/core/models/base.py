"""
Base Pydantic models and shared field types for svnbridge.

Working-copy paths and svn operands flow through most models, so their
coercion lives here rather than in per-model validators.
"""

from __future__ import annotations

import os
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict


def _absolute_path(value: Any) -> Any:
    if isinstance(value, (str, os.PathLike)):
        return os.path.abspath(os.fspath(value))
    return value


def _as_tuple(value: Any) -> Any:
    if isinstance(value, list):
        return tuple(value)
    return value


# Filesystem path stored in absolute form; accepts str or PathLike
AbsolutePath = Annotated[str, BeforeValidator(_absolute_path)]

# svn operands or flags; callers may pass a list, the model keeps a tuple
Operands = Annotated[tuple[str, ...], BeforeValidator(_as_tuple)]


class SvnBridgeBaseModel(BaseModel):
    """Base model for mutable svnbridge models.

    Strict by default: values that only work after implicit conversion
    (e.g. "1" for an int) are rejected, and so are unknown fields.
    """

    model_config = ConfigDict(
        strict=True,
        validate_assignment=True,
        extra="forbid",
    )


class ImmutableModel(BaseModel):
    """Frozen base model for requests, results and resolved roots."""

    model_config = ConfigDict(
        frozen=True,
        strict=True,
        extra="forbid",
    )
