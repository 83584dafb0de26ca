"""Codec error taxonomy.

Every error carries a stable ``code`` so CLIs and the verifier can report
failures without stack traces.
"""
from __future__ import annotations

ERRORS = {
    "E_SERIALIZATION": "Record cannot be represented on the wire",
    "E_CAPACITY": "Carrier exceeds the channel length budget",
    "E_MALFORMED_FRAME": "Frame structure is broken",
    "E_MALFORMED_PAYLOAD": "Frame payload does not decode to a record",
    "E_VERSION": "Frame uses an unsupported codec version",
    "E_CHECKSUM": "Frame checksum does not match its payload",
    "E_UNKNOWN_SYMBOL": "Frame contains a symbol outside the alphabet",
    "E_UNKNOWN_KIND": "Record kind tag is not recognized",
    "E_NO_FRAMES": "No decodable frame found",
}


class CodecError(ValueError):
    code = "E_SERIALIZATION"

    def __init__(self, detail: str = ""):
        self.detail = detail
        super().__init__(f"{ERRORS[self.code]}: {detail}" if detail else ERRORS[self.code])

    def to_dict(self) -> dict:
        out = {"code": self.code, "message": ERRORS[self.code]}
        if self.detail:
            out["detail"] = self.detail
        return out


class SerializationError(CodecError):
    code = "E_SERIALIZATION"


class CapacityExceeded(CodecError):
    code = "E_CAPACITY"


class FrameError(CodecError):
    """Base for decode-side failures of a single candidate frame."""

    code = "E_MALFORMED_FRAME"


class MalformedFrame(FrameError):
    code = "E_MALFORMED_FRAME"


class MalformedPayload(FrameError):
    code = "E_MALFORMED_PAYLOAD"


class VersionMismatch(FrameError):
    code = "E_VERSION"


class ChecksumMismatch(FrameError):
    code = "E_CHECKSUM"


class UnknownSymbol(FrameError):
    code = "E_UNKNOWN_SYMBOL"


class UnknownKind(FrameError):
    code = "E_UNKNOWN_KIND"


class FrameWarning(UserWarning):
    """Emitted when the scanner discards a candidate frame."""
