"""Tests for MCAP recording of traffic commands."""

from pathlib import Path

import pytest
import traffic_command.recording as recording
from conftest import header, make_command
from traffic_command.codec import validate_message
from traffic_command.data import LaneChangeAction, Timestamp
from traffic_command.recording import CommandRecorder, read_commands, topic_for
from traffic_command.validation import validate


def test_record_and_read(tmp_path: Path, valid_command) -> None:
    """Recorded commands read back as messages that validate to the recorded commands."""
    other = make_command(
        LaneChangeAction(action_header=header(2), relative_target_lane=1), participant_id=8
    )
    output = tmp_path / "logs" / "commands.mcap"

    with CommandRecorder(output) as recorder:
        recorder.record(validate(valid_command).unwrap())
        recorder.record(validate(other).unwrap())
    assert recorder.message_count == 2
    assert set(recorder.channel_ids) == {"/traffic_command/7", "/traffic_command/8"}

    records = list(read_commands(output))
    assert [log_time for log_time, _ in records] == [1_500_000_000, 1_500_000_000]
    commands = [validate_message(message).unwrap().command for _, message in records]
    assert valid_command in commands
    assert other in commands


def test_read_single_topic(tmp_path: Path, valid_command) -> None:
    output = tmp_path / "commands.mcap"
    other = make_command(LaneChangeAction(action_header=header(2)), participant_id=8)
    with CommandRecorder(output) as recorder:
        recorder.record(validate(valid_command).unwrap())
        recorder.record(validate(other).unwrap())

    records = list(read_commands(output, topics=[topic_for(other.traffic_participant_id)]))
    assert len(records) == 1
    assert records[0][1].to_traffic_command() == other


def test_record_requires_context(tmp_path: Path, valid_command) -> None:
    recorder = CommandRecorder(tmp_path / "commands.mcap")
    with pytest.raises(RuntimeError):
        recorder.record(validate(valid_command).unwrap())


def test_negative_log_time(tmp_path: Path, valid_command) -> None:
    early = valid_command.model_copy(update={"timestamp": Timestamp(seconds=-1)})
    with CommandRecorder(tmp_path / "commands.mcap") as recorder:
        with pytest.raises(ValueError):
            recorder.record(validate(early).unwrap())


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        list(read_commands(tmp_path / "missing.mcap"))


def test_enter_failure_closes_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """The output file is closed when the MCAP writer cannot start."""

    class FailingWriter:
        def __init__(self, stream) -> None:
            self.stream = stream

        def start(self) -> None:
            raise OSError("disk full")

    monkeypatch.setattr(recording, "Writer", FailingWriter)
    recorder = CommandRecorder(tmp_path / "commands.mcap")
    with pytest.raises(OSError, match="disk full"):
        with recorder:
            pass
    assert recorder.file.closed
    assert recorder.writer is None
