"""
Pydantic models for svnbridge.

This package provides typed, validated models for svnbridge data structures.
"""

from .base import ImmutableModel, SvnBridgeBaseModel
from .command import DIFF_VERBS, CommandRequest, CommandResult
from .config import (
    AuthConfig,
    EncodingConfig,
    ExecutionConfig,
    LoggingConfig,
    RootsConfig,
    SvnBridgeConfig,
    TimeoutsConfig,
)
from .credentials import AuthPromptResult, Credential
from .roots import RootOrigin, WorkingCopyRoot, is_ancestor_or_self

__all__ = [
    "DIFF_VERBS",
    "AuthConfig",
    "AuthPromptResult",
    "CommandRequest",
    "CommandResult",
    "Credential",
    "EncodingConfig",
    "ExecutionConfig",
    "ImmutableModel",
    "LoggingConfig",
    "RootOrigin",
    "RootsConfig",
    "SvnBridgeBaseModel",
    "SvnBridgeConfig",
    "TimeoutsConfig",
    "WorkingCopyRoot",
    "is_ancestor_or_self",
]
