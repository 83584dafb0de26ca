"""Compact positional wire layout for mention records.

Layout (UTF-8)::

    kind_tag name [0x1E tag value]...

``tag`` is ``i`` (id), ``m`` (mode) or ``x`` (extra). An extra segment is
``key 0x1F value``; a bare ``x`` segment marks an empty extra mapping.
Absent fields write no segment, so ``None`` and ``""`` stay distinct.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from .errors import MalformedPayload, SerializationError, UnknownKind
from .protocol import ENTRY_SEP, FIELD_EXTRA, FIELD_ID, FIELD_MODE, FIELD_SEP, KIND_TAGS

_KIND_BY_TAG = {tag: kind for kind, tag in KIND_TAGS.items()}
_RESERVED = (FIELD_SEP.decode("ascii"), ENTRY_SEP.decode("ascii"))


@dataclass(frozen=True)
class Record:
    kind: str
    name: str
    id: str | None = None
    mode: str | None = None
    extra: Mapping[str, str] | None = None

    def __post_init__(self) -> None:
        if self.extra is not None and not isinstance(self.extra, MappingProxyType):
            object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    def __hash__(self) -> int:
        extra = None if self.extra is None else tuple(sorted(self.extra.items()))
        return hash((self.kind, self.name, self.id, self.mode, extra))

    def to_dict(self) -> dict:
        out: dict = {"kind": self.kind, "name": self.name}
        if self.id is not None:
            out["id"] = self.id
        if self.mode is not None:
            out["mode"] = self.mode
        if self.extra is not None:
            out["extra"] = dict(self.extra)
        return out

    @classmethod
    def from_dict(cls, data: Mapping) -> "Record":
        return cls(
            kind=data["kind"],
            name=data["name"],
            id=data.get("id"),
            mode=data.get("mode"),
            extra=data.get("extra"),
        )


def _field_bytes(label: str, value) -> bytes:
    if not isinstance(value, str):
        raise SerializationError(f"{label} must be str, got {type(value).__name__}")
    for ch in _RESERVED:
        if ch in value:
            raise SerializationError(f"{label} contains reserved separator U+{ord(ch):04X}")
    try:
        return value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise SerializationError(f"{label} is not UTF-8 representable: {e.reason}") from None


def serialize(record: Record) -> bytes:
    tag = KIND_TAGS.get(record.kind)
    if tag is None:
        raise SerializationError(f"unsupported kind {record.kind!r}")
    name = _field_bytes("name", record.name)
    if not name:
        raise SerializationError("name must be non-empty")

    parts = [tag, name]
    if record.id is not None:
        parts += [FIELD_SEP, FIELD_ID, _field_bytes("id", record.id)]
    if record.mode is not None:
        parts += [FIELD_SEP, FIELD_MODE, _field_bytes("mode", record.mode)]
    if record.extra is not None:
        if not record.extra:
            parts += [FIELD_SEP, FIELD_EXTRA]
        for key in sorted(record.extra):
            k = _field_bytes("extra key", key)
            v = _field_bytes(f"extra[{key!r}]", record.extra[key])
            parts += [FIELD_SEP, FIELD_EXTRA, k, ENTRY_SEP, v]
    return b"".join(parts)


def _text(raw: bytes, label: str) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        raise MalformedPayload(f"{label} is not valid UTF-8") from None


def deserialize(data: bytes) -> Record:
    if not data:
        raise MalformedPayload("empty payload")
    kind = _KIND_BY_TAG.get(data[:1])
    if kind is None:
        raise UnknownKind(f"tag {data[:1]!r}")

    name_raw, *segments = data[1:].split(FIELD_SEP)
    name = _text(name_raw, "name")
    if not name:
        raise MalformedPayload("empty name")

    fields: dict[bytes, str] = {}
    extra: dict[str, str] | None = None
    for seg in segments:
        tag, body = seg[:1], seg[1:]
        if tag == FIELD_EXTRA:
            if extra is None:
                extra = {}
            if not body:
                continue
            if ENTRY_SEP not in body:
                raise MalformedPayload("extra entry without key separator")
            k_raw, v_raw = body.split(ENTRY_SEP, 1)
            key = _text(k_raw, "extra key")
            if key in extra:
                raise MalformedPayload(f"duplicate extra key {key!r}")
            extra[key] = _text(v_raw, "extra value")
        elif tag in (FIELD_ID, FIELD_MODE):
            if tag in fields:
                raise MalformedPayload(f"duplicate field {tag!r}")
            fields[tag] = _text(body, "field")
        else:
            raise MalformedPayload(f"unknown field tag {tag!r}")

    return Record(
        kind=kind,
        name=name,
        id=fields.get(FIELD_ID),
        mode=fields.get(FIELD_MODE),
        extra=extra,
    )
