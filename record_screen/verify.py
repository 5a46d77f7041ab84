# record_screen/verify.py
import logging
import os
import shutil
import subprocess
from typing import List, Optional

from .errors import VerificationError


def find_executable(name: str) -> Optional[str]:
    path = shutil.which(name)
    if path:
        logging.debug(f"Found {name} at: {path}")
        return path
    logging.error(f"{name} not found in system PATH.")
    return None


class VideoVerifier:
    """
    Inspects a finished recording with ffmpeg and ffprobe: decodes the whole
    file to check its integrity, and reads its duration and rotate metadata.
    """
    def __init__(self, ffmpeg_path: str = 'ffmpeg', ffprobe_path: str = 'ffprobe'):
        self.ffmpeg_path = ffmpeg_path
        self.ffprobe_path = ffprobe_path

    def _run(self, command: List[str]) -> str:
        cmd = ' '.join(command)
        logging.debug(f"Verification command: {cmd}")
        try:
            result = subprocess.run(
                command, capture_output=True, text=True, encoding='utf-8',
                errors='replace', check=True, env=os.environ
            )
        except subprocess.CalledProcessError as e:
            error_output = e.stderr.strip().split('\n')[-1] if e.stderr else ''
            raise VerificationError(f"'{command[0]}' failed with exit code {e.returncode}: {error_output}", cmd=cmd) from e
        except FileNotFoundError as e:
            raise VerificationError(f"'{command[0]}' not found.", cmd=cmd) from e
        return result.stdout

    def _probe_entry(self, video_file: str, entry: str) -> float:
        command = [
            self.ffprobe_path, '-v', 'error', '-show_entries', entry,
            '-of', 'default=noprint_wrappers=1:nokey=1', video_file
        ]
        output = self._run(command).strip()
        try:
            return float(output.split('\n')[0])
        except ValueError:
            raise VerificationError(f"Unexpected ffprobe output for {entry}: '{output}'", cmd=' '.join(command)) from None

    def check_integrity(self, video_file: str) -> None:
        """Raises VerificationError if ffmpeg reports any decoding error."""
        self._run([self.ffmpeg_path, '-v', 'error', '-i', video_file, '-f', 'null', '-'])

    def get_duration(self, video_file: str) -> float:
        """Container duration in seconds."""
        return self._probe_entry(video_file, 'format=duration')

    def get_rotate_metadata(self, video_file: str) -> int:
        return int(self._probe_entry(video_file, 'stream_tags=rotate'))
