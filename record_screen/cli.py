# record_screen/cli.py
import argparse
import asyncio
import logging
import os
import sys
import time
from typing import Dict, List, Optional

from .config import RecordingOptions, RecorderConfig
from .errors import RecordingError, VerificationError
from .progress_display import RecordingProgress
from .recorder import RecordingResult, record_screen
from .verify import VideoVerifier, find_executable

# CLI flag -> RecordingOptions field. A flag that is not given keeps the option's default.
OPTION_FLAGS = {
    '--loglevel': 'loglevel',
    '--input-format': 'input_format',
    '--resolution': 'resolution',
    '--fps': 'fps',
    '--video-codec': 'video_codec',
    '--pixel-format': 'pixel_format',
    '--hostname': 'hostname',
    '--display': 'display',
    '--protocol': 'protocol',
    '--port': 'port',
    '--pathname': 'pathname',
    '--search': 'search',
    '--username': 'username',
    '--password': 'password',
    '--rotate': 'rotate',
}
NUMERIC_OPTIONS = {'port', 'rotate'}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='record-screen',
        description="Record an X11 display or a network video stream with ffmpeg.",
        formatter_class=argparse.RawTextHelpFormatter,
        epilog="Pass 'none' to an option to omit the matching ffmpeg flag.\n"
               "Examples:\n"
               "  record-screen /tmp/screen.mp4 --resolution 1440x900 --duration 10\n"
               "  record-screen /tmp/stream.mp4 --input-format mjpeg --hostname cam.local --pathname /mjpeg"
    )
    parser.add_argument("output", help="Path of the video file to write (overwritten if it exists).")
    for flag, dest in OPTION_FLAGS.items():
        parser.add_argument(flag, dest=dest, default=argparse.SUPPRESS, help=f"Recording option '{dest}'.")
    parser.add_argument("--duration", type=float, help="Stop after this many seconds (default: until Ctrl+C).")
    parser.add_argument("--verify", action="store_true", help="Check integrity and duration of the recorded file.")
    parser.add_argument("--ffmpeg", help="Path to the ffmpeg executable.")
    return parser


def parse_number(value: str) -> object:
    """Returns an int or float when `value` is numeric, otherwise the string itself."""
    for convert in (int, float):
        try:
            return convert(value)
        except ValueError:
            pass
    return value


def options_from_args(args: argparse.Namespace) -> RecordingOptions:
    values: Dict[str, object] = {}
    for dest in OPTION_FLAGS.values():
        if not hasattr(args, dest):
            continue
        value = getattr(args, dest)
        if value.lower() == 'none':
            values[dest] = None
        elif dest in NUMERIC_OPTIONS:
            values[dest] = parse_number(value)
        else:
            values[dest] = value
    return RecordingOptions.from_mapping(values)


async def run_recording(output: str, options: RecordingOptions, config: RecorderConfig,
                        duration: Optional[float] = None, show_progress: bool = True) -> RecordingResult:
    """Records until `duration` elapses or the task is cancelled (Ctrl+C), then stops ffmpeg."""
    recording = record_screen(output, options, config)
    progress = RecordingProgress("Recording", duration) if show_progress else None
    started = time.monotonic()
    try:
        while not recording.promise.done():
            elapsed = time.monotonic() - started
            if duration is not None and elapsed >= duration:
                break
            if progress:
                progress.update(elapsed)
            await asyncio.wait({recording.promise}, timeout=0.25)
    except asyncio.CancelledError:
        logging.warning("Recording interrupted, finalizing output file...")
        recording.stop()
        await recording.promise
        raise
    finally:
        if progress:
            progress.finish()
    recording.stop()
    return await recording.promise


def verify_recording(output: str, duration: Optional[float]) -> None:
    ffmpeg_path = find_executable('ffmpeg')
    ffprobe_path = find_executable('ffprobe')
    if not (ffmpeg_path and ffprobe_path):
        raise VerificationError("FFmpeg or ffprobe not found. Please install FFmpeg suite.", cmd='')
    verifier = VideoVerifier(ffmpeg_path, ffprobe_path)
    verifier.check_integrity(output)
    video_duration = verifier.get_duration(output)
    logging.info(f"Recorded {video_duration:.2f}s of video.")
    if duration is not None and video_duration < duration:
        raise VerificationError(
            f"Recording is {video_duration:.2f}s long, expected at least {duration:.2f}s.", cmd=''
        )


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=os.environ.get("LOGLEVEL", "INFO"), format='%(asctime)s - [%(levelname)s] - %(message)s', datefmt='%H:%M:%S')
    args = build_parser().parse_args(argv)

    try:
        options = options_from_args(args)
        config = RecorderConfig(ffmpeg_path=args.ffmpeg) if args.ffmpeg is not None else RecorderConfig()
    except (TypeError, ValueError) as e:
        logging.critical(f"Invalid option: {e}")
        return 1

    logging.info(f"Recording to '{args.output}'. Press Ctrl+C to stop.")
    try:
        asyncio.run(run_recording(args.output, options, config, args.duration, sys.stderr.isatty()))
    except KeyboardInterrupt:
        logging.warning("Recording stopped by user.")
    except RecordingError as e:
        logging.critical(f"Recording failed: {e}")
        return 1

    if args.verify:
        try:
            verify_recording(args.output, args.duration)
        except VerificationError as e:
            logging.critical(f"Verification failed: {e}")
            return 1
        logging.info("✅ Recording verified.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
