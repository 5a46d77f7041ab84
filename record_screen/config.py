# record_screen/config.py
import logging
import os
import signal
from dataclasses import dataclass, field, fields
from typing import Any, Mapping, Optional, Tuple

X11_GRAB = 'x11grab'
DEFAULT_FPS = 15
DEFAULT_PIXEL_FORMAT = 'yuv420p'
DEFAULT_DISPLAY = '0'
DEFAULT_PROTOCOL = 'http'
DEFAULT_HOSTNAME = 'localhost'
DEFAULT_PORT = 9000
DEFAULT_PATHNAME = '/'


@dataclass(frozen=True)
class RecordingOptions:
    """
    Options for a single screen recording.

    Leaving a field unset uses its default. Setting a flag field to None omits
    the flag, so ffmpeg falls back to its own default. Values are not validated;
    ffmpeg rejects anything it does not understand.
    """
    loglevel: Optional[str] = None
    input_format: Optional[str] = X11_GRAB
    resolution: Optional[str] = None
    fps: Optional[Any] = DEFAULT_FPS
    video_codec: Optional[str] = None
    pixel_format: Optional[str] = DEFAULT_PIXEL_FORMAT
    hostname: Optional[str] = None
    display: Optional[str] = DEFAULT_DISPLAY
    protocol: Optional[str] = DEFAULT_PROTOCOL
    port: Optional[Any] = DEFAULT_PORT
    pathname: Optional[str] = DEFAULT_PATHNAME
    search: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    rotate: Optional[Any] = None

    @classmethod
    def from_mapping(cls, options: Optional[Mapping[str, Any]]) -> 'RecordingOptions':
        """Builds options from a plain dict. Unknown keys are logged and ignored."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            logging.warning(f"Ignoring unknown recording option(s): {', '.join(unknown)}")
        return cls(**{key: value for key, value in options.items() if key in known})

    @property
    def captures_display(self) -> bool:
        return self.input_format == X11_GRAB


def _default_ffmpeg_path() -> str:
    return os.environ.get('RECORD_SCREEN_FFMPEG') or 'ffmpeg'


@dataclass
class RecorderConfig:
    """Controls how the ffmpeg process is spawned and stopped."""
    ffmpeg_path: str = field(default_factory=_default_ffmpeg_path)
    stop_signal: int = signal.SIGINT
    # ffmpeg exits with 255 when it finalizes after an interrupt.
    graceful_exit_codes: Tuple[int, ...] = (0, 255)
    # Only the end of ffmpeg's output is kept; its stats lines grow with the recording.
    output_tail_bytes: int = 64 * 1024

    def __post_init__(self):
        """Validate configuration parameters after initialization."""
        if not self.ffmpeg_path:
            raise ValueError("ffmpeg_path must not be empty.")
        if 0 not in self.graceful_exit_codes:
            raise ValueError("graceful_exit_codes must include 0.")
        if self.output_tail_bytes <= 0:
            raise ValueError("output_tail_bytes must be positive.")
        self.stop_signal = signal.Signals(self.stop_signal)
