"""Frame builder and parser.

Frame text: ``START version SEP payload SEP checksum END``. Version and
checksum are fixed-width digit fields; the payload is the packed record.
"""
from __future__ import annotations

import binascii
from dataclasses import dataclass

from .alphabet import Alphabet, field_width
from .errors import ChecksumMismatch, MalformedFrame, VersionMismatch
from .packer import decode_int, encode_int, pack, unpack
from .protocol import (
    CHANNEL_MAX_LENGTH,
    CHECKSUM_CRC16,
    CHECKSUM_MODES,
    CHECKSUM_MODULUS,
    CRC_SEED,
    DEFAULT_BASE,
    FRAME_END,
    FRAME_SEP,
    FRAME_START,
    VERSION,
    VERSION_SPACE,
)
from .record import Record, deserialize, serialize


@dataclass(frozen=True)
class CodecConfig:
    """Immutable codec settings shared by encoder and decoder."""

    base: int = DEFAULT_BASE
    version: int = VERSION
    checksum: str = CHECKSUM_CRC16
    max_length: int = CHANNEL_MAX_LENGTH

    def __post_init__(self) -> None:
        if self.checksum not in CHECKSUM_MODES:
            raise ValueError(f"checksum must be one of {CHECKSUM_MODES}, got {self.checksum!r}")
        if not 0 <= self.version < VERSION_SPACE:
            raise ValueError(f"version must be in [0, {VERSION_SPACE}), got {self.version}")
        if self.max_length <= 0:
            raise ValueError("max_length must be positive")
        # Validates the base.
        Alphabet(self.base)

    @property
    def alphabet(self) -> Alphabet:
        return Alphabet(self.base)

    @property
    def version_width(self) -> int:
        return field_width(VERSION_SPACE, self.base)

    @property
    def checksum_width(self) -> int:
        return field_width(CHECKSUM_MODULUS, self.base)


DEFAULT_CONFIG = CodecConfig()


def payload_checksum(digits: list[int], mode: str = CHECKSUM_CRC16) -> int:
    """Accidental-corruption check over payload digits. Not tamper-proof."""
    if mode == CHECKSUM_CRC16:
        return binascii.crc_hqx(bytes(digits), CRC_SEED)
    return len(digits) % CHECKSUM_MODULUS


def build_frame(record: Record, config: CodecConfig = DEFAULT_CONFIG) -> str:
    alpha = config.alphabet
    digits = pack(serialize(record), config.base)
    version = encode_int(config.version, config.version_width, config.base)
    checksum = encode_int(payload_checksum(digits, config.checksum), config.checksum_width, config.base)
    return (
        FRAME_START
        + alpha.render(version)
        + FRAME_SEP
        + alpha.render(digits)
        + FRAME_SEP
        + alpha.render(checksum)
        + FRAME_END
    )


def parse_frame(interior: str, config: CodecConfig = DEFAULT_CONFIG) -> Record:
    """Decode the text strictly between a START and its END marker."""
    parts = interior.split(FRAME_SEP)
    if len(parts) != 3:
        raise MalformedFrame(f"expected 3 sections, found {len(parts)}")
    version_part, payload_part, checksum_part = parts

    alpha = config.alphabet
    if len(version_part) != config.version_width:
        raise MalformedFrame(f"version field is {len(version_part)} symbols, expected {config.version_width}")
    version = decode_int(alpha.read(version_part), config.base)
    if version != config.version:
        raise VersionMismatch(f"frame v{version}, decoder v{config.version}")

    if len(checksum_part) != config.checksum_width:
        raise MalformedFrame(f"checksum field is {len(checksum_part)} symbols, expected {config.checksum_width}")
    claimed = decode_int(alpha.read(checksum_part), config.base)
    digits = alpha.read(payload_part)
    actual = payload_checksum(digits, config.checksum)
    if claimed != actual:
        raise ChecksumMismatch(f"claimed {claimed:#06x}, computed {actual:#06x}")

    return deserialize(unpack(digits, config.base))
