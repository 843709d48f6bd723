"""
tohls - Convert media files into HTTP Live Streaming bitrate ladders

This package provides a small conversion pipeline that:
- Parses user supplied rendition formats (SIZE:FRAMERATE:QUALITY)
- Probes the source for its native resolution and frame rate
- Plans each rendition's resolution and bitrate parameters
- Encodes every rendition into HLS segments using ffmpeg
- Writes a master playlist referencing all renditions

Renditions are listed in the master playlist in the order their
formats were given on the command line.
"""

__version__ = "0.1.0"
