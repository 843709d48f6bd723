"""Unit tests for per-file pipeline orchestration

Probing and encoding are replaced with in-memory fakes; only the master
playlist is written to a temporary directory.
"""

import threading
from pathlib import Path
from unittest.mock import patch

import pytest

from tohls import config
from tohls.exceptions import (
    EncodingError, MetadataError, PlaylistError, ProcessingError
)
from tohls.ffprobe.media import SourceInspector, SourceMetadata
from tohls.formats import parse_formats
from tohls.pipeline import process_file, process_files
from tohls.video.encoder import RenditionEncoder

class FakeInspector(SourceInspector):
    def __init__(self, metadata=None, error=None):
        self.metadata = metadata or SourceMetadata(3840, 2160, 30.0)
        self.error = error
        self.calls = []

    def inspect(self, input_file):
        self.calls.append(input_file)
        if self.error:
            raise self.error
        return self.metadata

class FakeEncoder(RenditionEncoder):
    def __init__(self, fail_on=()):
        self.fail_on = set(fail_on)
        self.calls = []
        self._lock = threading.Lock()

    def encode(self, input_file, rendition, output_dir):
        with self._lock:
            self.calls.append((input_file, rendition.name))
        if rendition.name in self.fail_on:
            raise EncodingError(f"ffmpeg failed to encode {rendition.name}", module="encoder")
        return rendition.playlist_name

@pytest.fixture
def formats():
    return parse_formats(["360p::", "1080p::", "720p::"])

@pytest.fixture(autouse=True)
def no_stagger():
    with patch.object(config, "TASK_STAGGER_DELAY", 0):
        yield

def test_process_file_writes_master_in_format_order(tmp_path, formats):
    inspector, encoder = FakeInspector(), FakeEncoder()
    master = process_file(Path("/videos/drone.mp4"), formats, inspector, encoder, tmp_path)

    assert master == tmp_path / "drone.mp4.master.m3u8"
    lines = master.read_text().splitlines()
    assert lines[0] == "#EXTM3U"
    assert lines[2::2] == ["v640x360.m3u8", "v1920x1080.m3u8", "v1280x720.m3u8"]
    assert lines[1].startswith("#EXT-X-STREAM-INF:BANDWIDTH=")
    assert lines[1].endswith(",RESOLUTION=640x360")
    assert inspector.calls == [Path("/videos/drone.mp4")]
    assert [name for _, name in encoder.calls] == ["v640x360", "v1920x1080", "v1280x720"]

def test_bandwidth_is_video_bitrate(tmp_path):
    formats = parse_formats(["1280x720:30:0.11"])
    master = process_file(Path("in.mp4"), formats, FakeInspector(), FakeEncoder(), tmp_path)
    assert "BANDWIDTH=3041280,RESOLUTION=1280x720" in master.read_text()

def test_probe_failure_stops_before_encoding(tmp_path, formats):
    inspector = FakeInspector(error=MetadataError("divisor causes division by zero error", module="ffprobe"))
    encoder = FakeEncoder()
    with pytest.raises(ProcessingError) as exc_info:
        process_file(Path("in.mp4"), formats, inspector, encoder, tmp_path)
    assert exc_info.value.stage == "couldn't probe file"
    assert isinstance(exc_info.value.__cause__, MetadataError)
    assert encoder.calls == []
    assert not (tmp_path / "in.mp4.master.m3u8").exists()

def test_encode_failure_stops_remaining_renditions(tmp_path, formats):
    encoder = FakeEncoder(fail_on={"v1920x1080"})
    with pytest.raises(ProcessingError) as exc_info:
        process_file(Path("in.mp4"), formats, FakeInspector(), encoder, tmp_path)
    assert exc_info.value.stage == "unable to convert"
    assert "in.mp4" in str(exc_info.value)
    assert [name for _, name in encoder.calls] == ["v640x360", "v1920x1080"]
    assert not (tmp_path / "in.mp4.master.m3u8").exists()

def test_playlist_failure(tmp_path, formats):
    with patch("tohls.pipeline.write_master_playlist") as mock_write:
        mock_write.side_effect = PlaylistError("Couldn't open file", module="playlist")
        with pytest.raises(ProcessingError) as exc_info:
            process_file(Path("in.mp4"), formats, FakeInspector(), FakeEncoder(), tmp_path)
    assert exc_info.value.stage == "unable to join"

def test_parallel_encoding_keeps_declaration_order(tmp_path, formats):
    encoder = FakeEncoder()
    master = process_file(Path("in.mp4"), formats, FakeInspector(), encoder, tmp_path, jobs=3)
    lines = master.read_text().splitlines()
    assert lines[2::2] == ["v640x360.m3u8", "v1920x1080.m3u8", "v1280x720.m3u8"]
    assert sorted(name for _, name in encoder.calls) == ["v1280x720", "v1920x1080", "v640x360"]

def test_parallel_encoding_failure(tmp_path, formats):
    encoder = FakeEncoder(fail_on={"v640x360"})
    with pytest.raises(ProcessingError) as exc_info:
        process_file(Path("in.mp4"), formats, FakeInspector(), encoder, tmp_path, jobs=2)
    assert isinstance(exc_info.value.__cause__, EncodingError)
    assert "v640x360" in str(exc_info.value)
    assert not (tmp_path / "in.mp4.master.m3u8").exists()

def test_process_files_halts_on_first_failing_file(tmp_path):
    formats = parse_formats(["720p::"])
    inspector = FakeInspector()
    encoder = FakeEncoder(fail_on={"v1280x720"})
    with pytest.raises(ProcessingError):
        process_files([Path("a.mp4"), Path("b.mp4")], formats, inspector, encoder, tmp_path)
    assert inspector.calls == [Path("a.mp4")]

def test_process_files_all_succeed(tmp_path):
    formats = parse_formats(["720p::", "360p::"])
    masters = process_files(
        [Path("a.mp4"), Path("b.mov")], formats, FakeInspector(), FakeEncoder(), tmp_path
    )
    assert [m.name for m in masters] == ["a.mp4.master.m3u8", "b.mov.master.m3u8"]
    assert all(m.exists() for m in masters)
