"""Helper functions for building ffmpeg commands"""

import logging
from pathlib import Path

import ffmpeg

from .. import config
from ..planner import ResolvedRendition

log = logging.getLogger(__name__)

def build_scale_filter(rendition: ResolvedRendition) -> str:
    """Build the scale and frame rate filter for a rendition."""
    return f"scale=w={rendition.width}:h={rendition.height},fps={rendition.frame_rate:f}"

def build_hls_encode_stream(
    input_file: Path,
    rendition: ResolvedRendition,
    output_dir: Path
):
    """
    Build the ffmpeg-python output stream encoding one HLS rendition.

    The rendition playlist is written to output_dir/v{W}x{H}.m3u8 and its
    segments to output_dir/v{W}x{H}_%03d.ts.
    """
    rates = rendition.bitrates
    output_args = {
        "filter:v": build_scale_filter(rendition),
        "c:a": config.AUDIO_CODEC,
        "strict": "-2",
        "ar": config.AUDIO_SAMPLE_RATE,
        "c:v": config.VIDEO_CODEC,
        "crf": config.CRF,
        "profile:v": config.PROFILE,
        "pix_fmt": config.PIX_FMT,
        "format": "hls",
        "hls_time": config.HLS_TIME,
        "hls_playlist_type": config.HLS_PLAYLIST_TYPE,
        "b:v": rates.video_bitrate,
        "maxrate": rates.max_video_bitrate,
        "bufsize:v": rates.buffer_size,
        "b:a": rates.audio_bitrate,
        "hls_segment_filename": str(output_dir / rendition.segment_pattern),
    }
    stream = ffmpeg.input(str(input_file))
    stream = ffmpeg.output(stream, str(output_dir / rendition.playlist_name), **output_args)
    stream = stream.global_args("-hide_banner", "-loglevel", "warning")
    return ffmpeg.overwrite_output(stream)

def build_hls_encode_command(
    input_file: Path,
    rendition: ResolvedRendition,
    output_dir: Path
) -> list:
    """Build the full ffmpeg command line for one HLS rendition."""
    stream = build_hls_encode_stream(input_file, rendition, output_dir)
    return ffmpeg.compile(stream, cmd=config.FFMPEG)
