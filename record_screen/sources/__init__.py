# record_screen/sources/__init__.py
from ..config import RecordingOptions
from ..interfaces import SourceBuilder
from .display import DisplaySource
from .network import NetworkSource


def select_source(options: RecordingOptions) -> SourceBuilder:
    """X11 grabbing reads a display, every other input format reads a URL."""
    if options.captures_display:
        return DisplaySource()
    return NetworkSource()
