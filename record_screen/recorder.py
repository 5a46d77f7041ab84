# record_screen/recorder.py
import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional

from .arguments import OptionsLike, build_command
from .config import RecorderConfig
from .errors import RecordingError


@dataclass
class RecordingResult:
    """What a successfully finished recording resolves with."""
    cmd: str
    returncode: int
    stdout: str
    stderr: str


class Recording:
    """
    Handle for one running ffmpeg process.

    `promise` is an asyncio task that resolves with a RecordingResult when
    ffmpeg exits cleanly and raises RecordingError otherwise. `stop()` asks
    ffmpeg to finalize the output file and exit.
    """
    def __init__(self, command: List[str], config: RecorderConfig):
        self.command = command
        self.cmd = ' '.join(command)
        self.config = config
        self._process: Optional[asyncio.subprocess.Process] = None
        self._stop_requested = False
        loop = asyncio.get_running_loop()
        self.promise: 'asyncio.Task[RecordingResult]' = loop.create_task(self._run())

    @property
    def pid(self) -> Optional[int]:
        return self._process.pid if self._process else None

    def stop(self) -> None:
        """Sends the stop signal once. Later calls, or calls after exit, do nothing."""
        if self._stop_requested or self.promise.done():
            return
        if self._process is None:
            # Sent as soon as the process has been spawned.
            self._stop_requested = True
            return
        self._stop_requested = self._send_stop_signal()

    def _send_stop_signal(self) -> bool:
        """Returns whether the signal reached a running process."""
        if self._process.returncode is not None:
            return False
        logging.info(f"Stopping recording (PID: {self._process.pid}) with {self.config.stop_signal.name}")
        try:
            self._process.send_signal(self.config.stop_signal)
        except ProcessLookupError:
            return False  # Process already died
        return True

    def _is_graceful_exit(self, returncode: int) -> bool:
        if returncode == 0:
            return True
        if not self._stop_requested:
            return False
        return returncode in self.config.graceful_exit_codes or returncode == -self.config.stop_signal

    async def _read_tail(self, stream: asyncio.StreamReader) -> bytes:
        limit = self.config.output_tail_bytes
        tail = bytearray()
        while True:
            chunk = await stream.read(4096)
            if not chunk:
                break
            tail.extend(chunk)
            del tail[:-limit]
        return bytes(tail)

    async def _run(self) -> RecordingResult:
        logging.debug(f"FFmpeg command: {self.cmd}")
        try:
            self._process = await asyncio.create_subprocess_exec(
                *self.command, stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE, stderr=asyncio.subprocess.PIPE
            )
        except OSError as e:
            logging.error(f"Could not start ffmpeg: {e}")
            raise RecordingError(f"Failed to spawn '{self.command[0]}': {e}", cmd=self.cmd) from e

        logging.info(f"Recording started (PID: {self._process.pid}): {self.command[-1]}")
        if self._stop_requested:
            self._stop_requested = self._send_stop_signal()

        stdout, stderr, returncode = await asyncio.gather(
            self._read_tail(self._process.stdout),
            self._read_tail(self._process.stderr),
            self._process.wait()
        )
        out = stdout.decode('utf-8', errors='replace')
        err = stderr.decode('utf-8', errors='replace')
        if err:
            logging.debug(f"FFmpeg output:\n{err}")

        if not self._is_graceful_exit(returncode):
            logging.error(f"Recording failed with exit code {returncode}.")
            error_lines = err.strip().split('\n')
            for line in error_lines[-5:]:
                logging.error(f"  {line}")
            raise RecordingError(
                f"Command failed with exit code {returncode}: {self.cmd}",
                cmd=self.cmd, returncode=returncode, stderr=err
            )

        logging.info(f"Recording finished: {self.command[-1]}")
        return RecordingResult(cmd=self.cmd, returncode=returncode, stdout=out, stderr=err)


def record_screen(video_file: str, options: OptionsLike = None, config: Optional[RecorderConfig] = None) -> Recording:
    """
    Starts recording the screen (or a network stream) into `video_file`.

    Must be called while an event loop is running; the ffmpeg process is spawned
    by the returned recording's promise.
    """
    config = config or RecorderConfig()
    command = build_command(config.ffmpeg_path, video_file, options)
    return Recording(command, config)
