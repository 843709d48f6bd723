"""Low-level ffprobe execution

Responsibilities:
- Build the ffprobe command for video stream properties
- Run it and return its raw text output
- Convert process failures into MetadataError
"""

import logging
import subprocess
from pathlib import Path
from typing import Sequence

from .. import config
from ..exceptions import MetadataError
from ..utils import run_cmd

logger = logging.getLogger(__name__)

VIDEO_PROPERTIES = ("width", "height", "r_frame_rate")

def build_probe_command(path: Path, properties: Sequence[str] = VIDEO_PROPERTIES) -> list:
    """Build an ffprobe command printing the first video stream's properties as CSV."""
    return [
        config.FFPROBE, "-v", "error",
        "-select_streams", "v:0",
        "-show_entries", f"stream={','.join(properties)}",
        "-of", "csv=s=,:p=0",
        str(path)
    ]

def ffprobe_query(path: Path, properties: Sequence[str] = VIDEO_PROPERTIES) -> str:
    """
    Run ffprobe for the given stream properties.

    Args:
        path: Path to media file
        properties: Stream entries to show, in output order

    Returns:
        The stripped ffprobe output, e.g. "1920,1080,24000/1001"

    Raises:
        MetadataError: If ffprobe cannot be started or exits with an error
    """
    cmd = build_probe_command(path, properties)
    try:
        result = run_cmd(cmd)
    except (OSError, subprocess.CalledProcessError) as e:
        raise MetadataError(f"Failed to query ffprobe: {e}", module="ffprobe") from e
    return result.stdout.strip()
