"""Source media properties

Responsibilities:
- Parse "WIDTH,HEIGHT,NUM/DEN" probe output into SourceMetadata
- Compute the frame rate from its rational form
- Define the SourceInspector capability and its ffprobe implementation
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from ..exceptions import MetadataError
from .exec import ffprobe_query

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class SourceMetadata:
    """Native properties of a source file's first video stream."""
    width: int
    height: int
    frame_rate: float

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

def parse_probe_output(output: str) -> SourceMetadata:
    """
    Parse ffprobe CSV output for width, height and r_frame_rate.

    Args:
        output: Probe output such as "1920,1080,30000/1001"

    Returns:
        SourceMetadata with frame_rate = numerator / denominator

    Raises:
        MetadataError: If the output does not hold exactly three fields,
            any field is not an integer, or the denominator is zero
    """
    parts = output.strip().split(",")
    if len(parts) != 3:
        raise MetadataError(
            f"Couldn't parse output: expected 3 parts but found {len(parts)}",
            module="ffprobe"
        )
    w, h, ratio = parts

    numerator, sep, denominator = ratio.partition("/")
    if not sep:
        raise MetadataError("Unexpected probe output: couldn't find '/'", module="ffprobe")

    try:
        width = int(w)
        height = int(h)
        numerator = int(numerator)
        denominator = int(denominator)
    except ValueError as e:
        raise MetadataError(f"Unable to parse probe result '{output}'", module="ffprobe") from e

    if denominator == 0:
        raise MetadataError(
            "Unable to calculate frame rate, divisor causes division by zero error",
            module="ffprobe"
        )
    if width <= 0 or height <= 0:
        raise MetadataError(f"Invalid source resolution {width}x{height}", module="ffprobe")

    return SourceMetadata(width=width, height=height, frame_rate=numerator / denominator)

def get_source_metadata(path: Path) -> SourceMetadata:
    """Probe a file and return the metadata of its first video stream."""
    metadata = parse_probe_output(ffprobe_query(path))
    logger.info(
        "Source %s: %dx%d @ %.3f fps",
        path.name, metadata.width, metadata.height, metadata.frame_rate
    )
    return metadata

class SourceInspector(ABC):
    """Capability returning the native metadata of a source file."""

    @abstractmethod
    def inspect(self, input_file: Path) -> SourceMetadata:
        """Return the source metadata.

        Raises:
            MetadataError: If the file cannot be inspected
        """
        pass

class FFProbeInspector(SourceInspector):
    """SourceInspector backed by the ffprobe executable."""

    def inspect(self, input_file: Path) -> SourceMetadata:
        return get_source_metadata(input_file)
