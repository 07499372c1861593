"""Typo recovery for commands, paths and tokens."""

from .commands import CommandSuggester, ReasonTrace
from .paths import PathAIReport, PathSuggester, Suggestion, SuggestionSet
from .tokens import RecoveryResult, TokenRecoverer

__all__ = [
    "CommandSuggester",
    "ReasonTrace",
    "PathAIReport",
    "PathSuggester",
    "Suggestion",
    "SuggestionSet",
    "RecoveryResult",
    "TokenRecoverer",
]
