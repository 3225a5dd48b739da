"""Completion service clients."""

from .client import CompletionClient, build_completion_client
from .interface import Completion, CompletionService, MockCompletionService

__all__ = [
    "Completion",
    "CompletionClient",
    "CompletionService",
    "MockCompletionService",
    "build_completion_client",
]
