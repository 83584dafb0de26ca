"""Boundary operations: encode, embed and capacity checks."""
from __future__ import annotations

from dataclasses import dataclass

from .errors import CapacityExceeded
from .frame import DEFAULT_CONFIG, CodecConfig, build_frame
from .record import Record


def carrier_length(text: str) -> int:
    """Length in channel units (UTF-16 code units; a lone surrogate counts as one)."""
    return len(text.encode("utf-16-le", "surrogatepass")) // 2


@dataclass(frozen=True)
class CapacityReport:
    label_length: int
    frame_length: int
    limit: int

    @property
    def total(self) -> int:
        return self.label_length + self.frame_length

    @property
    def remaining(self) -> int:
        return self.limit - self.total

    @property
    def fits(self) -> bool:
        return self.total <= self.limit

    def to_dict(self) -> dict:
        return {
            "label_length": self.label_length,
            "frame_length": self.frame_length,
            "total": self.total,
            "limit": self.limit,
            "remaining": self.remaining,
            "fits": self.fits,
        }


def _report(label: str, frame: str, config: CodecConfig) -> CapacityReport:
    return CapacityReport(carrier_length(label), carrier_length(frame), config.max_length)


def capacity_report(label: str, record: Record, config: CodecConfig = DEFAULT_CONFIG) -> CapacityReport:
    """Pre-flight size check. Raises SerializationError for unrepresentable records."""
    return _report(label, build_frame(record, config), config)


def encode_record(record: Record, label: str = "", config: CodecConfig = DEFAULT_CONFIG) -> str:
    """Build the invisible frame for ``record``, enforcing the channel budget for ``label``."""
    frame = build_frame(record, config)
    report = _report(label, frame, config)
    if not report.fits:
        raise CapacityExceeded(f"{report.total} units exceeds limit {report.limit}")
    return frame


def embed_mention(label: str, record: Record, config: CodecConfig = DEFAULT_CONFIG) -> str:
    return label + encode_record(record, label, config)


def max_name_length(label: str, kind: str = "task", config: CodecConfig = DEFAULT_CONFIG) -> int:
    """Longest single-byte name that still fits after ``label``. 0 if none does."""
    lo, hi = 0, config.max_length
    while lo < hi:
        mid = (lo + hi + 1) // 2
        if capacity_report(label, Record(kind=kind, name="n" * mid), config).fits:
            lo = mid
        else:
            hi = mid - 1
    return lo
