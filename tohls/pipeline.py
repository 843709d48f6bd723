"""High-level pipeline orchestration for HLS conversion

Responsibilities:
  - Probe each input file once for its source metadata.
  - Plan every requested rendition against that metadata.
  - Encode the renditions, sequentially or on a worker pool.
  - Join the produced renditions into the file's master playlist.

Processing stops at the first failure; renditions already written to
disk for the failing file are left in place.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, List, Optional

from . import config
from .exceptions import (
    MetadataError, PlanningError, EncodingError,
    PlaylistError, ProcessingError
)
from .ffprobe.media import FFProbeInspector, SourceInspector
from .formats import FormatDescriptor
from .formatting import print_check, print_info, print_success
from .planner import ResolvedRendition, plan_renditions
from .playlist import Stream, master_playlist_name, write_master_playlist
from .scheduler import MemoryAwareScheduler
from .video.encoder import FFmpegRenditionEncoder, RenditionEncoder

logger = logging.getLogger(__name__)

def _describe(rendition: ResolvedRendition) -> str:
    rates = rendition.bitrates
    return (
        f"{rendition.width}x{rendition.height} @ {rendition.frame_rate:.3f} fps, "
        f"video {rates.video_bitrate} b/s, audio {rates.audio_bitrate} b/s"
    )

def _encode_sequential(
    input_file: Path,
    renditions: List[ResolvedRendition],
    encoder: RenditionEncoder,
    output_dir: Path
) -> List[str]:
    file_names = []
    for rendition in renditions:
        print_check(f"Encoding {rendition.playlist_name} ({_describe(rendition)})")
        file_names.append(encoder.encode(input_file, rendition, output_dir))
    return file_names

def _encode_parallel(
    input_file: Path,
    renditions: List[ResolvedRendition],
    encoder: RenditionEncoder,
    output_dir: Path,
    jobs: int
) -> List[str]:
    """
    Encode renditions on a thread pool.

    Submission stops once any encode fails; encodes already running are
    allowed to finish. Results are collected in declaration order, so the
    first failure in that order is the one raised.
    """
    scheduler = MemoryAwareScheduler(jobs, config.MEMORY_RESERVE, config.TASK_STAGGER_DELAY)
    futures = []
    failed = False

    with ThreadPoolExecutor(max_workers=jobs) as executor:
        next_idx = 0
        while next_idx < len(renditions) and not failed:
            if scheduler.can_submit():
                rendition = renditions[next_idx]
                print_check(f"Encoding {rendition.playlist_name} ({_describe(rendition)})")
                future = executor.submit(encoder.encode, input_file, rendition, output_dir)
                scheduler.add_task(next_idx, future)
                futures.append(future)
                next_idx += 1
            else:
                time.sleep(0.1)

            for task_id, future in scheduler.update_completed():
                if future.exception() is not None:
                    logger.error("Encode of %s failed", renditions[task_id].playlist_name)
                    failed = True

    if failed and next_idx < len(renditions):
        logger.warning("Skipped %d rendition(s) after failure", len(renditions) - next_idx)
    return [future.result() for future in futures]

def encode_renditions(
    input_file: Path,
    renditions: List[ResolvedRendition],
    encoder: RenditionEncoder,
    output_dir: Path,
    jobs: int = 1
) -> List[Stream]:
    """
    Encode every rendition and describe the results as master playlist streams.

    Returns:
        Streams in the same order as renditions

    Raises:
        EncodingError: From the first failed rendition
    """
    if jobs > 1 and len(renditions) > 1:
        file_names = _encode_parallel(input_file, renditions, encoder, output_dir, jobs)
    else:
        file_names = _encode_sequential(input_file, renditions, encoder, output_dir)

    return [
        Stream(
            width=rendition.width,
            height=rendition.height,
            bandwidth=rendition.bitrates.video_bitrate,
            file_name=file_name,
        )
        for rendition, file_name in zip(renditions, file_names)
    ]

def process_file(
    input_file: Path,
    formats: List[FormatDescriptor],
    inspector: Optional[SourceInspector] = None,
    encoder: Optional[RenditionEncoder] = None,
    output_dir: Optional[Path] = None,
    jobs: int = 1
) -> Path:
    """
    Convert a single input file into an HLS bitrate ladder.

    Args:
        input_file: Path to the source media file
        formats: Rendition formats, in master playlist order
        inspector: Source metadata capability, ffprobe by default
        encoder: Rendition encoder capability, ffmpeg by default
        output_dir: Directory for renditions and master playlist, cwd by default
        jobs: Number of renditions encoded in parallel

    Returns:
        Path: The written master playlist

    Raises:
        ProcessingError: Wrapping the failure of any stage
    """
    input_file = Path(input_file)
    inspector = inspector or FFProbeInspector()
    encoder = encoder or FFmpegRenditionEncoder()
    output_dir = Path(output_dir) if output_dir is not None else Path.cwd()

    print_info(f"Processing file '{input_file}'")
    logger.info("Beginning conversion of: %s", input_file)

    try:
        source = inspector.inspect(input_file)
    except MetadataError as e:
        raise ProcessingError(input_file, "couldn't probe file", e.message) from e

    try:
        renditions = plan_renditions(formats, source)
    except PlanningError as e:
        raise ProcessingError(input_file, "unable to plan renditions", e.message) from e

    for descriptor in formats:
        logger.info("Format '%s'", descriptor)

    try:
        streams = encode_renditions(input_file, renditions, encoder, output_dir, jobs)
    except EncodingError as e:
        raise ProcessingError(input_file, "unable to convert", e.message) from e

    master = output_dir / master_playlist_name(input_file)
    print_check(f"Joining into '{master.name}'")
    try:
        write_master_playlist(master, streams)
    except PlaylistError as e:
        raise ProcessingError(input_file, "unable to join", e.message) from e

    print_success(f"Done: {input_file.name}")
    return master

def process_files(
    input_files: Iterable[Path],
    formats: List[FormatDescriptor],
    inspector: Optional[SourceInspector] = None,
    encoder: Optional[RenditionEncoder] = None,
    output_dir: Optional[Path] = None,
    jobs: int = 1
) -> List[Path]:
    """Process input files in order, halting at the first failing file."""
    return [
        process_file(input_file, formats, inspector, encoder, output_dir, jobs)
        for input_file in input_files
    ]
