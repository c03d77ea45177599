"""MCAP recording of validated traffic command streams."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator
from pathlib import Path
from typing import Any

from mcap.reader import make_reader
from mcap.writer import Writer

from traffic_command.codec import JsonCodec
from traffic_command.data.primitives import NANOS_PER_SECOND, Identifier
from traffic_command.data.wire import TrafficCommandMessage
from traffic_command.errors import CodecError
from traffic_command.validation.validator import ValidatedCommand

logger = logging.getLogger(__name__)

SCHEMA_NAME = "osi3.TrafficCommand"
TOPIC_PREFIX = "/traffic_command"


def topic_for(participant_id: Identifier) -> str:
    """MCAP topic of a traffic participant."""
    return f"{TOPIC_PREFIX}/{participant_id}"


class CommandRecorder:
    """Record validated traffic commands into an MCAP file.

    One channel is registered per traffic participant. Messages are stored in
    the JSON wire encoding of :class:`JsonCodec`.
    """

    def __init__(self, output_path: str | Path) -> None:
        """Initialize recorder.

        Args:
            output_path: Output file path (.mcap)
        """
        self.output_path = Path(output_path)
        self.codec = JsonCodec()
        self.file: Any = None
        self.writer: Writer | None = None
        self.schema_id: int | None = None
        self.channel_ids: dict[str, int] = {}
        self.message_count = 0

    def __enter__(self) -> CommandRecorder:
        """Open MCAP file for writing."""
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.file = open(self.output_path, "wb")
        try:
            self.writer = Writer(self.file)
            self.writer.start()

            self.schema_id = self.writer.register_schema(
                name=SCHEMA_NAME,
                encoding="jsonschema",
                data=json.dumps(TrafficCommandMessage.model_json_schema()).encode(),
            )
        except BaseException:
            # __exit__ does not run when __enter__ raises
            self.file.close()
            self.writer = None
            raise
        return self

    def record(self, validated: ValidatedCommand) -> None:
        """Record one validated command.

        The log time is the command timestamp.

        Args:
            validated: Command that passed validation
        """
        if self.writer is None or self.schema_id is None:
            msg = "Recorder not initialized. Use 'with CommandRecorder(...) as recorder:'"
            raise RuntimeError(msg)

        command = validated.command
        topic = topic_for(command.traffic_participant_id)
        channel_id = self.channel_ids.get(topic)
        if channel_id is None:
            channel_id = self.writer.register_channel(
                topic=topic,
                message_encoding="json",
                schema_id=self.schema_id,
            )
            self.channel_ids[topic] = channel_id

        stamp = command.timestamp
        log_time = stamp.seconds * NANOS_PER_SECOND + stamp.nanos
        if log_time < 0:
            raise ValueError(f"MCAP log time must be non-negative, got {log_time} ns")
        self.writer.add_message(
            channel_id=channel_id,
            log_time=log_time,
            data=self.codec.encode(validated),
            publish_time=log_time,
        )
        self.message_count += 1

    def __exit__(self, *args: Any) -> None:
        """Close MCAP file."""
        if self.writer:
            self.writer.finish()
        if self.file:
            self.file.close()
        logger.info(f"Recorded {self.message_count} traffic command(s) to {self.output_path}")


def read_commands(
    mcap_path: str | Path, topics: list[str] | None = None
) -> Generator[tuple[int, TrafficCommandMessage], None, None]:
    """Read recorded traffic commands back.

    Messages are returned as unvalidated wire messages; run them through the
    validator before handing them to a consumer.

    Args:
        mcap_path: Path to the MCAP file
        topics: Topics to read, all traffic command topics if None

    Yields:
        (log_time_ns, message)

    Raises:
        FileNotFoundError: If the file does not exist
        CodecError: If a recorded message cannot be decoded
    """
    path = Path(mcap_path)
    if not path.exists():
        raise FileNotFoundError(f"MCAP file not found: {mcap_path}")

    codec = JsonCodec()
    with open(path, "rb") as f:
        reader = make_reader(f)
        for schema, channel, message in reader.iter_messages(topics=topics):
            if schema is None or schema.name != SCHEMA_NAME:
                continue
            try:
                yield message.log_time, codec.decode(message.data)
            except CodecError:
                logger.error(f"Corrupt traffic command on {channel.topic} at {message.log_time}")
                raise
