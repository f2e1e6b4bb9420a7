"""Core types, errors and process helpers."""

from adrbridge.core.errors import (
    AdrBridgeError,
    CommandError,
    CommandFailedError,
    CompanionToolNotFoundError,
    ConfigError,
    ErrorKind,
    ExecutableNotFoundError,
    MalformedOutputError,
    NotARepositoryError,
    RuntimeNotFoundError,
    TimeoutExceededError,
    UnexpectedShapeError,
)
from adrbridge.core.types import (
    ABSENT,
    CommandOutcome,
    DecisionRecord,
    RelationRef,
    WorkspaceCapabilities,
)

__all__ = [
    "ABSENT",
    "AdrBridgeError",
    "CommandError",
    "CommandFailedError",
    "CommandOutcome",
    "CompanionToolNotFoundError",
    "ConfigError",
    "DecisionRecord",
    "ErrorKind",
    "ExecutableNotFoundError",
    "MalformedOutputError",
    "NotARepositoryError",
    "RelationRef",
    "RuntimeNotFoundError",
    "TimeoutExceededError",
    "UnexpectedShapeError",
    "WorkspaceCapabilities",
]
