"""Rendition planning

Responsibilities:
- Resolve partial format descriptors against source metadata
- Derive the bitrate ladder parameters for each rendition

Bitrate formula:
    video bitrate = width x height x frame rate x quality factor  (bits/s)
    max bitrate   = 0.07 x video bitrate
    buffer size   = 2 x max bitrate
    audio bitrate = 96k up to 640x360, 128k up to 1280x720, 192k above
"""

import logging
from dataclasses import dataclass
from typing import List

from . import config
from .exceptions import PlanningError
from .ffprobe.media import SourceMetadata
from .formats import FormatDescriptor
from .utils import round_half_up

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class BitRates:
    """Bitrate parameters passed to the encoder, all in bits per second."""
    video_bitrate: int
    max_video_bitrate: int
    buffer_size: int
    audio_bitrate: int

@dataclass(frozen=True)
class ResolvedRendition:
    """A fully concrete rendition ready to be encoded."""
    width: int
    height: int
    frame_rate: float
    quality_factor: float
    bitrates: BitRates

    @property
    def name(self) -> str:
        return f"v{self.width}x{self.height}"

    @property
    def playlist_name(self) -> str:
        return f"{self.name}.m3u8"

    @property
    def segment_pattern(self) -> str:
        # %03d is expanded by the encoder
        return f"{self.name}_%03d.ts"

def audio_bitrate_for(width: int, height: int) -> int:
    """Select the audio bitrate from the rendition area."""
    area = width * height
    for max_area, bitrate in config.AUDIO_BITRATE_STEPS:
        if area <= max_area:
            return bitrate
    return config.AUDIO_BITRATE_MAX

def compute_bitrates(width: int, height: int, frame_rate: float, quality_factor: float) -> BitRates:
    """
    Compute the bitrate ladder parameters for a resolved rendition.

    Args:
        width: Resolved width in pixels
        height: Resolved height in pixels
        frame_rate: Resolved frames per second
        quality_factor: Resolved quality factor

    Returns:
        BitRates in bits per second
    """
    video_bitrate = round_half_up(width * height * frame_rate * quality_factor)
    max_video_bitrate = round_half_up(config.MAX_RATE_FACTOR * video_bitrate)
    return BitRates(
        video_bitrate=video_bitrate,
        max_video_bitrate=max_video_bitrate,
        buffer_size=config.BUFFER_SIZE_FACTOR * max_video_bitrate,
        audio_bitrate=audio_bitrate_for(width, height),
    )

def derive_width(source: SourceMetadata, height: int) -> int:
    """Width matching the source aspect ratio at the given height, rounded up to even."""
    width = round_half_up(source.aspect_ratio * height)
    if width % 2 != 0:
        width += 1
    return width

def plan_rendition(descriptor: FormatDescriptor, source: SourceMetadata) -> ResolvedRendition:
    """
    Resolve a format descriptor against the source metadata.

    Omitted width is derived from the source aspect ratio (and made even),
    omitted frame rate is taken from the source, and omitted quality factor
    falls back to the medium default. An explicit width is used unchanged.

    Raises:
        PlanningError: If the descriptor or source holds non-positive values
    """
    if descriptor.height <= 0:
        raise PlanningError(f"Invalid rendition height {descriptor.height}", module="planner")
    if source.width <= 0 or source.height <= 0 or source.frame_rate <= 0:
        raise PlanningError(
            f"Invalid source metadata {source.width}x{source.height} @ {source.frame_rate} fps",
            module="planner"
        )

    height = descriptor.height
    width = descriptor.width if descriptor.width else derive_width(source, height)
    frame_rate = descriptor.frame_rate if descriptor.frame_rate else source.frame_rate
    quality_factor = descriptor.quality_factor if descriptor.quality_factor else config.DEFAULT_QUALITY_FACTOR

    if width <= 0 or frame_rate <= 0 or quality_factor <= 0:
        raise PlanningError(f"Unable to resolve format '{descriptor}'", module="planner")

    bitrates = compute_bitrates(width, height, frame_rate, quality_factor)
    logger.debug(
        "Planned %dx%d @ %.3f fps, quality %.2f: video %d, max %d, buffer %d, audio %d",
        width, height, frame_rate, quality_factor, bitrates.video_bitrate,
        bitrates.max_video_bitrate, bitrates.buffer_size, bitrates.audio_bitrate
    )
    return ResolvedRendition(
        width=width,
        height=height,
        frame_rate=frame_rate,
        quality_factor=quality_factor,
        bitrates=bitrates,
    )

def plan_renditions(formats: List[FormatDescriptor], source: SourceMetadata) -> List[ResolvedRendition]:
    """Resolve every format in declaration order."""
    return [plan_rendition(descriptor, source) for descriptor in formats]
