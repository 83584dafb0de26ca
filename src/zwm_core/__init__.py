"""ZWM Core - Zero-width mention codec."""
from .alphabet import Alphabet
from .codec import CapacityReport, capacity_report, carrier_length, embed_mention, encode_record, max_name_length
from .errors import (
    CapacityExceeded,
    ChecksumMismatch,
    CodecError,
    FrameError,
    FrameWarning,
    MalformedFrame,
    MalformedPayload,
    SerializationError,
    UnknownKind,
    UnknownSymbol,
    VersionMismatch,
)
from .frame import DEFAULT_CONFIG, CodecConfig, build_frame, parse_frame
from .mention import ParsedMention, agent_label, create_agent_mention, create_task_mention, parse_mention, task_label
from .record import Record, deserialize, serialize
from .scan import FrameScanner, Mention, decode_all, decode_first, has_mentions, strip_invisible

__all__ = [
    "Alphabet",
    "CapacityReport",
    "capacity_report",
    "carrier_length",
    "embed_mention",
    "encode_record",
    "max_name_length",
    "CapacityExceeded",
    "ChecksumMismatch",
    "CodecError",
    "FrameError",
    "FrameWarning",
    "MalformedFrame",
    "MalformedPayload",
    "SerializationError",
    "UnknownKind",
    "UnknownSymbol",
    "VersionMismatch",
    "DEFAULT_CONFIG",
    "CodecConfig",
    "build_frame",
    "parse_frame",
    "ParsedMention",
    "agent_label",
    "create_agent_mention",
    "create_task_mention",
    "parse_mention",
    "task_label",
    "Record",
    "deserialize",
    "serialize",
    "FrameScanner",
    "Mention",
    "decode_all",
    "decode_first",
    "has_mentions",
    "strip_invisible",
]
