"""FFProbe utilities for source media inspection

This package provides utilities for:
- Executing ffprobe queries for the first video stream
- Parsing probe output into SourceMetadata
- The SourceInspector capability used by the pipeline
"""

from .exec import ffprobe_query
from .media import (
    SourceMetadata, SourceInspector, FFProbeInspector,
    parse_probe_output, get_source_metadata
)

__all__ = [
    'ffprobe_query',
    'SourceMetadata',
    'SourceInspector',
    'FFProbeInspector',
    'parse_probe_output',
    'get_source_metadata'
]
