"""
Note Sink Factory for creating note sinks.
Implements Factory Pattern so the host can pick where synthesized notes go.
"""
from pathlib import Path
from typing import Optional

from ...core import config
from ...core.logging_config import get_logger
from .base import NoteSink
from .local_storage import LocalNoteSink

logger = get_logger(__name__)


class NoteSinkFactory:
    """Factory for creating note sinks."""

    @staticmethod
    def create(sink_type: Optional[str] = None, **kwargs) -> NoteSink:
        """
        Create a note sink instance.

        Args:
            sink_type: Type of sink ('local', or None to read NOTE_SINK_TYPE)
            **kwargs: Additional arguments for the specific sink

        Returns:
            NoteSink instance

        Examples:
            sink = NoteSinkFactory.create('local', base_dir=Path('vault/AI'))
        """
        if sink_type is None:
            sink_type = config.NOTE_SINK_TYPE

        sink_type = sink_type.lower()

        if sink_type == "local":
            return NoteSinkFactory._create_local(**kwargs)
        raise ValueError(
            f"Unsupported note sink type: {sink_type}. "
            f"Supported types: 'local'"
        )

    @staticmethod
    def _create_local(**kwargs) -> LocalNoteSink:
        base_dir = kwargs.get("base_dir")
        if base_dir is None:
            base_dir = config.NOTES_DIR
        elif isinstance(base_dir, str):
            base_dir = Path(base_dir)

        logger.info(f"Creating local note sink at {base_dir}")
        return LocalNoteSink(base_dir=base_dir)
