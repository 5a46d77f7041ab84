# record_screen/arguments.py
from typing import Any, List, Mapping, Union

from .config import RecordingOptions
from .sources import select_source

OptionsLike = Union[RecordingOptions, Mapping[str, Any], None]


def rotate_metadata(rotate: Any) -> str:
    # ffmpeg stores the rotation needed to display the video upright, i.e. the inverse angle.
    try:
        return f"rotate={360 - rotate}"
    except TypeError:
        # Not a number: ffmpeg gets the value as given.
        return f"rotate={rotate}"


def build_ffmpeg_args(video_file: str, options: OptionsLike = None) -> List[str]:
    """
    Maps recording options to ffmpeg arguments (without the executable).

    The order is significant to ffmpeg: input options must precede `-i`,
    output options must follow it.
    """
    opts = RecordingOptions.from_mapping(options)
    args = ['-y']
    if opts.loglevel is not None:
        args.extend(['-loglevel', str(opts.loglevel)])
    if opts.resolution is not None:
        args.extend(['-video_size', str(opts.resolution)])
    if opts.fps is not None:
        args.extend(['-r', str(opts.fps)])
    if opts.input_format is not None:
        args.extend(['-f', str(opts.input_format)])
    args.extend(['-i', select_source(opts).build_source(opts)])
    if opts.video_codec is not None:
        args.extend(['-vcodec', str(opts.video_codec)])
    if opts.pixel_format is not None:
        args.extend(['-pix_fmt', str(opts.pixel_format)])
    if opts.rotate is not None:
        args.extend(['-metadata:s:v:0', rotate_metadata(opts.rotate)])
    args.append(str(video_file))
    return args


def build_command(ffmpeg_path: str, video_file: str, options: OptionsLike = None) -> List[str]:
    """Full command line, executable first."""
    return [ffmpeg_path] + build_ffmpeg_args(video_file, options)
