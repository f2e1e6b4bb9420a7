"""Process execution and capability probing."""

from adrbridge.execution.probe import CapabilityCache, CapabilityProbe
from adrbridge.execution.runner import CommandRunner, ProcessRunner

__all__ = [
    "CapabilityCache",
    "CapabilityProbe",
    "CommandRunner",
    "ProcessRunner",
]
