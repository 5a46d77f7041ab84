# record_screen/errors.py
from typing import Optional


class RecordScreenError(Exception):
    """Base exception for all errors in this package."""
    pass


class RecordingError(RecordScreenError):
    """
    Raised (through the recording's promise) when ffmpeg could not be spawned
    or exited abnormally. `cmd` is the full command line that was invoked.
    """
    def __init__(self, message: str, cmd: str, returncode: Optional[int] = None, stderr: str = ''):
        super().__init__(message)
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr


class VerificationError(RecordScreenError):
    """Raised when ffmpeg/ffprobe fails to verify a recorded file."""
    def __init__(self, message: str, cmd: str):
        super().__init__(message)
        self.cmd = cmd
