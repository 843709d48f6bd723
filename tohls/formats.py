"""Rendition format descriptors

Responsibilities:
- Parse SIZE:FRAMERATE:QUALITY strings into FormatDescriptor objects
- Render descriptors back into their canonical string form

Grammar:
    FORMAT    = SIZE:FRAMERATE:QUALITY
    SIZE      = WxH | Hp
    FRAMERATE = <decimal number> | EMPTY
    QUALITY   = <decimal number> | EMPTY

An omitted width is derived from the source aspect ratio, an omitted
frame rate from the source, and an omitted quality factor defaults to
the medium preset.
"""

import logging
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Optional

from .exceptions import FormatParseError

logger = logging.getLogger(__name__)

_UNSIGNED = re.compile(r"[0-9]+")
_DECIMAL = re.compile(r"[0-9]+(\.[0-9]*)?|\.[0-9]+")

@dataclass(frozen=True)
class FormatDescriptor:
    """A possibly partial rendition request.

    Attributes:
        height: Rendition height in pixels
        width: Rendition width in pixels, None to derive from the source aspect ratio
        frame_rate: Frames per second, None to keep the source frame rate
        quality_factor: Bitrate quality factor, None for the default
    """
    height: int
    width: Optional[int] = None
    frame_rate: Optional[float] = None
    quality_factor: Optional[float] = None

    def __str__(self) -> str:
        size = f"{self.height}p" if self.width is None else f"{self.width}x{self.height}"
        frame_rate = "" if self.frame_rate is None else _format_decimal(self.frame_rate)
        quality = "" if self.quality_factor is None else _format_decimal(self.quality_factor)
        return f"{size}:{frame_rate}:{quality}"

def _format_decimal(number: float) -> str:
    # Positional notation, shortest digits that round-trip
    return format(Decimal(repr(number)), "f")

def _parse_unsigned(text: str, value: str) -> int:
    if not _UNSIGNED.fullmatch(text):
        raise FormatParseError(value)
    number = int(text)
    if number <= 0:
        raise FormatParseError(value)
    return number

def _parse_optional_decimal(text: str, value: str) -> Optional[float]:
    if text == "":
        return None
    if not _DECIMAL.fullmatch(text):
        raise FormatParseError(value)
    number = float(text)
    if number <= 0:
        raise FormatParseError(value)
    return number

def parse_format(value: str) -> FormatDescriptor:
    """
    Parse a single SIZE:FRAMERATE:QUALITY string.

    Args:
        value: Raw format string, e.g. "1920x1080::", "720p:30:" or "360p::0.07"

    Returns:
        FormatDescriptor: The parsed descriptor

    Raises:
        FormatParseError: If the string does not follow the grammar
    """
    parts = value.split(":")
    if len(parts) != 3:
        raise FormatParseError(value)
    size, frame_rate, quality_factor = parts

    if size.endswith("p"):
        width = None
        height = _parse_unsigned(size[:-1], value)
    else:
        w, sep, h = size.partition("x")
        if not sep:
            raise FormatParseError(value)
        width = _parse_unsigned(w, value)
        height = _parse_unsigned(h, value)

    return FormatDescriptor(
        height=height,
        width=width,
        frame_rate=_parse_optional_decimal(frame_rate, value),
        quality_factor=_parse_optional_decimal(quality_factor, value),
    )

def parse_formats(values: Iterable[str]) -> List[FormatDescriptor]:
    """Parse every format string, failing on the first malformed one."""
    formats = []
    for value in values:
        descriptor = parse_format(value)
        logger.debug("Parsed format '%s' as %r", value, descriptor)
        formats.append(descriptor)
    return formats
