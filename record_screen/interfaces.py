# record_screen/interfaces.py
from typing import Protocol

from .config import RecordingOptions


class SourceBuilder(Protocol):
    """Interface for any class that builds the value passed to ffmpeg's `-i`."""
    def build_source(self, options: RecordingOptions) -> str:
        ...
