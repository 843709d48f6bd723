"""Unit tests for command builder functionality

This test suite verifies the construction of the ffmpeg command that
encodes one rendition into an HLS playlist and its segments.
"""

import unittest
from pathlib import Path
from tohls import config
from tohls.ffprobe.media import SourceMetadata
from tohls.formats import parse_format
from tohls.planner import plan_rendition
from tohls.video.command_builders import build_hls_encode_command, build_scale_filter

def value_after(cmd, flag):
    return cmd[cmd.index(flag) + 1]

class TestCommandBuilders(unittest.TestCase):
    """Test cases for command builder utilities"""
    def setUp(self):
        source = SourceMetadata(width=3840, height=2160, frame_rate=30.0)
        self.rendition = plan_rendition(parse_format("720p::"), source)
        self.input_file = Path("/tmp/input.mp4")
        self.output_dir = Path("/tmp/out")

    def test_build_scale_filter(self):
        self.assertEqual(build_scale_filter(self.rendition), "scale=w=1280:h=720,fps=30.000000")

    def test_build_hls_encode_command(self):
        cmd = build_hls_encode_command(self.input_file, self.rendition, self.output_dir)
        self.assertEqual(cmd[0], config.FFMPEG)
        self.assertEqual(value_after(cmd, "-i"), "/tmp/input.mp4")
        self.assertEqual(value_after(cmd, "-filter:v"), "scale=w=1280:h=720,fps=30.000000")
        self.assertEqual(value_after(cmd, "-f"), "hls")
        self.assertEqual(value_after(cmd, "-c:v"), "libx264")
        self.assertEqual(value_after(cmd, "-c:a"), "aac")
        self.assertEqual(value_after(cmd, "-hls_playlist_type"), "vod")
        self.assertEqual(value_after(cmd, "-hls_time"), str(config.HLS_TIME))
        self.assertIn("-y", cmd)

    def test_bitrate_arguments(self):
        rates = self.rendition.bitrates
        cmd = build_hls_encode_command(self.input_file, self.rendition, self.output_dir)
        self.assertEqual(value_after(cmd, "-b:v"), str(rates.video_bitrate))
        self.assertEqual(value_after(cmd, "-maxrate"), str(rates.max_video_bitrate))
        self.assertEqual(value_after(cmd, "-bufsize:v"), str(rates.buffer_size))
        self.assertEqual(value_after(cmd, "-b:a"), "128000")

    def test_output_names(self):
        cmd = build_hls_encode_command(self.input_file, self.rendition, self.output_dir)
        self.assertEqual(
            value_after(cmd, "-hls_segment_filename"),
            str(self.output_dir / "v1280x720_%03d.ts")
        )
        self.assertIn(str(self.output_dir / "v1280x720.m3u8"), cmd)

if __name__ == "__main__":
    unittest.main()
