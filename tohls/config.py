"""Configuration settings for the tohls conversion pipeline

This module centralizes all configuration settings including:
- Log file location and level
- External tool names
- Fixed encoder parameters used for every rendition
- Quality factor levels and bitrate ladder constants
- Parallel encoding limits

User-configurable settings are read from environment variables.
"""

import os
from pathlib import Path

# LOG_DIR: user definable with default of "$HOME/tohls_logs"
LOG_DIR = Path(os.environ.get("TOHLS_LOG_DIR", str(Path.home() / "tohls_logs")))

# Logging configuration
LOG_LEVEL = os.environ.get("TOHLS_LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR, CRITICAL

# External tools
FFMPEG = os.environ.get("TOHLS_FFMPEG", "ffmpeg")
FFPROBE = os.environ.get("TOHLS_FFPROBE", "ffprobe")

# Encoder settings shared by every rendition
AUDIO_CODEC = "aac"
AUDIO_SAMPLE_RATE = 48000
VIDEO_CODEC = "libx264"
CRF = 20
PROFILE = "main"
PIX_FMT = "yuv420p"
HLS_TIME = int(os.environ.get("TOHLS_HLS_TIME", "10"))  # Segment length in seconds
HLS_PLAYLIST_TYPE = "vod"

# Quality factor presets (bits per pixel per frame)
QUALITY_LOW = 0.07
QUALITY_LOW_MED = 0.09
QUALITY_MED = 0.11
QUALITY_MED_HIGH = 0.13
QUALITY_HIGH = 0.15

DEFAULT_QUALITY_FACTOR = QUALITY_MED

# Bitrate ladder constants
MAX_RATE_FACTOR = 0.07  # Historical value, every produced ladder depends on it
BUFFER_SIZE_FACTOR = 2

# (maximum area, audio bitrate) pairs, checked in order
AUDIO_BITRATE_STEPS = (
    (640 * 360, 96000),
    (1280 * 720, 128000),
)
AUDIO_BITRATE_MAX = 192000

# Parallel encoding settings
MAX_PARALLEL_ENCODES = int(os.environ.get("TOHLS_JOBS", "1"))  # 1 encodes renditions sequentially
MEMORY_RESERVE = 0.2  # Fraction of system memory kept free
TASK_STAGGER_DELAY = 0.2  # Delay between task submissions in seconds
