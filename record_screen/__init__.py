# record_screen/__init__.py

# Expose the main entry point for easy importing
from .recorder import record_screen, Recording, RecordingResult

# Expose the argument builder and configuration data classes as well.
from .arguments import build_ffmpeg_args, build_command
from .config import RecordingOptions, RecorderConfig
from .verify import VideoVerifier
from .errors import RecordScreenError, RecordingError, VerificationError
