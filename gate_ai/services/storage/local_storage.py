"""
Local filesystem note sink.
Writes each note as a markdown file under a base directory (e.g. a vault folder).
"""
import asyncio
import re
from pathlib import Path
from typing import Optional

from ...core.exceptions import NoteSinkError
from ...core.logging_config import get_logger
from .base import NoteSink

logger = get_logger(__name__)

MAX_FILENAME_LENGTH = 100
_INVALID_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|]')
_WHITESPACE = re.compile(r"\s+")


def sanitize_filename(title: str) -> str:
    """
    Turn a note title into a safe file stem.

    Replaces characters that are invalid in filenames with '-', collapses
    whitespace and truncates to MAX_FILENAME_LENGTH characters.
    """
    name = _INVALID_FILENAME_CHARS.sub("-", title or "")
    name = _WHITESPACE.sub(" ", name).strip()
    name = name[:MAX_FILENAME_LENGTH].strip()
    return name or "Untitled"


class LocalNoteSink(NoteSink):
    """
    Local filesystem note sink.
    Never overwrites: a clashing name gets a " (n)" suffix.
    """

    def __init__(self, base_dir: Optional[Path] = None):
        """
        Initialize the local note sink.

        Args:
            base_dir: Directory notes are written to (defaults to NOTES_DIR)
        """
        if base_dir is None:
            from ...core.config import NOTES_DIR
            base_dir = NOTES_DIR

        self.base_dir = Path(base_dir)

    def _available_path(self, stem: str) -> Path:
        candidate = self.base_dir / f"{stem}.md"
        counter = 1
        while candidate.exists():
            candidate = self.base_dir / f"{stem} ({counter}).md"
            counter += 1
        return candidate

    async def save_note(self, title: str, content: str) -> str:
        """Write the note and return its path relative to base_dir."""
        stem = sanitize_filename(title)

        def _save() -> Path:
            # Encode before the file exists
            data = content.encode("utf-8")
            self.base_dir.mkdir(parents=True, exist_ok=True)
            path = self._available_path(stem)
            # "xb" fails instead of clobbering a file created in the meantime
            with open(path, "xb") as f:
                f.write(data)
            return path

        loop = asyncio.get_running_loop()
        try:
            path = await loop.run_in_executor(None, _save)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to save note '{stem}': {e}")
            raise NoteSinkError(f"Failed to save note '{stem}': {e}") from e

        relative = path.relative_to(self.base_dir).as_posix()
        logger.info(f"Saved note to {relative} ({len(content)} chars)")
        return relative
