"""Task and agent mention helpers built on the codec."""
from __future__ import annotations

from typing import Mapping, NamedTuple

from .codec import embed_mention
from .frame import DEFAULT_CONFIG, CodecConfig
from .protocol import AGENT_LABEL, TASK_LABEL
from .record import Record
from .scan import decode_first, strip_invisible


class ParsedMention(NamedTuple):
    display_text: str
    record: Record | None


def task_label(name: str) -> str:
    return TASK_LABEL.format(name=name)


def agent_label(name: str) -> str:
    return AGENT_LABEL.format(name=name)


def create_task_mention(
    name: str,
    task_id: str | None = None,
    extra: Mapping[str, str] | None = None,
    config: CodecConfig = DEFAULT_CONFIG,
) -> str:
    record = Record(kind="task", name=name, id=task_id, extra=extra)
    return embed_mention(task_label(name), record, config)


def create_agent_mention(
    name: str,
    mode_id: str | None = None,
    extra: Mapping[str, str] | None = None,
    config: CodecConfig = DEFAULT_CONFIG,
) -> str:
    record = Record(kind="agent", name=name, mode=mode_id, extra=extra)
    return embed_mention(agent_label(name), record, config)


def parse_mention(text: str, config: CodecConfig = DEFAULT_CONFIG) -> ParsedMention:
    return ParsedMention(strip_invisible(text, config), decode_first(text, config))
