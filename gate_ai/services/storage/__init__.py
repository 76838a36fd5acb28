from .base import NoteSink
from .factory import NoteSinkFactory
from .local_storage import LocalNoteSink, sanitize_filename

__all__ = ["NoteSink", "NoteSinkFactory", "LocalNoteSink", "sanitize_filename"]
