"""Rendition encoder interface and its ffmpeg implementation.

A RenditionEncoder turns one resolved rendition of a source file into a
rendition playlist plus its media segments, and returns the playlist's
file name for the master playlist.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

import ffmpeg

from .. import config
from ..exceptions import EncodingError
from ..planner import ResolvedRendition
from .command_builders import build_hls_encode_stream

logger = logging.getLogger(__name__)

class RenditionEncoder(ABC):
    """Base encoder interface that all rendition encoders must implement."""

    @abstractmethod
    def encode(
        self,
        input_file: Path,
        rendition: ResolvedRendition,
        output_dir: Path
    ) -> str:
        """Encode one rendition of the input file.

        Args:
            input_file: Path to the source media file
            rendition: Fully resolved rendition parameters
            output_dir: Directory receiving the playlist and segments

        Returns:
            str: File name of the rendition playlist, relative to output_dir

        Raises:
            EncodingError: If the rendition could not be produced
        """
        pass

class FFmpegRenditionEncoder(RenditionEncoder):
    """Encodes renditions into HLS with ffmpeg and libx264."""

    def encode(
        self,
        input_file: Path,
        rendition: ResolvedRendition,
        output_dir: Path
    ) -> str:
        stream = build_hls_encode_stream(input_file, rendition, output_dir)
        cmd = ffmpeg.compile(stream, cmd=config.FFMPEG)
        logger.info("Running command: %s", " ".join(cmd))
        try:
            _, stderr = ffmpeg.run(
                stream, cmd=config.FFMPEG, capture_stdout=True, capture_stderr=True
            )
        except ffmpeg.Error as e:
            output = e.stderr.decode(errors="replace") if e.stderr else ""
            logger.error("Failed on command: %s", " ".join(cmd))
            logger.error("Error output: %s", output)
            raise EncodingError(
                f"ffmpeg failed to encode {rendition.name}",
                module="encoder",
                ffmpeg_output=output
            ) from e
        except OSError as e:
            raise EncodingError(f"Unable to run {config.FFMPEG}: {e}", module="encoder") from e

        if stderr:
            logger.debug("Command stderr: %s", stderr.decode(errors="replace"))
        return rendition.playlist_name
