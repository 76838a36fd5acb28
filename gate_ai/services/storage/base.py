"""
Abstract base class for note sinks.
A note sink persists a finished markdown document under a title.
"""
from abc import ABC, abstractmethod


class NoteSink(ABC):
    """
    Abstract interface for note persistence.
    Lets the synthesis pipeline hand off documents without knowing where they end up.
    """

    @abstractmethod
    async def save_note(self, title: str, content: str) -> str:
        """
        Persist a markdown note.

        Args:
            title: Human-readable note title (used to derive the filename)
            content: Finished markdown document

        Returns:
            Storage path/key where the note was saved

        Raises:
            NoteSinkError: If the note could not be written
        """
        pass
