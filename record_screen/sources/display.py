# record_screen/sources/display.py
from ..config import RecordingOptions, DEFAULT_DISPLAY


class DisplaySource:
    """Builds an X11 display identifier such as `:0` or `127.0.0.1:0.0+100,100`."""

    def build_source(self, options: RecordingOptions) -> str:
        hostname = options.hostname or ''
        display = options.display if options.display is not None else DEFAULT_DISPLAY
        return f"{hostname}:{display}"
