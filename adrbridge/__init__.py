"""Resilient async bridge to the ``git adr`` decision-record tool."""

from adrbridge.client import AdrClient
from adrbridge.config.schema import AdrSettings
from adrbridge.core.types import ABSENT, DecisionRecord, WorkspaceCapabilities

__version__ = "0.1.0"

__all__ = [
    "ABSENT",
    "AdrClient",
    "AdrSettings",
    "DecisionRecord",
    "WorkspaceCapabilities",
]
