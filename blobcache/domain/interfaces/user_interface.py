"""Interface for interacting with the user (output only).

Defines the contract for displaying results, information, warnings and
errors, allowing different UI implementations (e.g., console, tests).
"""

import abc
from typing import Any, List

from blobcache.domain.models.cache import CacheStats, Entry


class UserInterface(abc.ABC):
    """Abstract Base Class for user interaction."""

    @abc.abstractmethod
    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message to the user."""
        pass

    @abc.abstractmethod
    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        """Displays a warning message to the user."""
        pass

    @abc.abstractmethod
    def display_info(self, info_message: str, **kwargs: Any) -> None:
        """Displays an informational message to the user."""
        pass

    @abc.abstractmethod
    def display_stats(self, stats: CacheStats) -> None:
        """Renders a usage summary of the cache directory."""
        pass

    @abc.abstractmethod
    def display_entries(self, entries: List[Entry]) -> None:
        """Renders the cache entries, most recently used first."""
        pass
