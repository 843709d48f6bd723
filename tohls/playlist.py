"""HLS master playlist assembly

Responsibilities:
- Describe produced renditions as Stream entries
- Render the master playlist text in declaration order
- Write the playlist, always releasing the file handle
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from .exceptions import PlaylistError

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class Stream:
    """A successfully encoded rendition as listed in the master playlist."""
    width: int
    height: int
    bandwidth: int
    file_name: str

def master_playlist_name(input_file: Path) -> str:
    """Name of the master playlist for an input file, e.g. movie.mp4.master.m3u8"""
    return f"{Path(input_file).name}.master.m3u8"

def render_master_playlist(streams: Iterable[Stream]) -> str:
    """Render the master playlist; streams keep their given order."""
    lines = ["#EXTM3U"]
    for stream in streams:
        lines.append(
            f"#EXT-X-STREAM-INF:BANDWIDTH={stream.bandwidth},"
            f"RESOLUTION={stream.width}x{stream.height}"
        )
        lines.append(stream.file_name)
    return "\n".join(lines) + "\n"

def write_master_playlist(path: Path, streams: Iterable[Stream]) -> Path:
    """
    Write the master playlist to path.

    Raises:
        PlaylistError: If the file cannot be created or fully written
    """
    content = render_master_playlist(streams)
    try:
        handle = open(path, "w", encoding="utf-8", newline="\n")
    except OSError as e:
        raise PlaylistError(f"Couldn't open file {path}: {e}", module="playlist") from e

    # Closing flushes the buffer and can fail like a write
    try:
        with handle:
            handle.write(content)
    except OSError as e:
        raise PlaylistError(f"Unable to write file {path}: {e}", module="playlist") from e

    logger.info("Master playlist written: %s", path)
    return path
