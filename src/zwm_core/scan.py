"""Locate and decode every frame in free-form text."""
from __future__ import annotations

from typing import NamedTuple
from warnings import warn

from .errors import FrameError, FrameWarning, MalformedFrame
from .frame import DEFAULT_CONFIG, CodecConfig, parse_frame
from .protocol import FRAME_END, FRAME_START
from .record import Record


class Mention(NamedTuple):
    offset: int
    record: Record


class FrameScanner:
    """Left-to-right frame scanner with partial recovery.

    - A candidate runs from a START to the next END.
    - A rejected candidate never aborts the scan: scanning resumes one
      character after its START, so a later valid frame is still found.
    """

    def __init__(self, config: CodecConfig = DEFAULT_CONFIG):
        self.config = config
        self.rejections: list[dict] = []
        self.scan_stats = {
            "candidates": 0,
            "records": 0,
            "rejected": 0,
            "unterminated": 0,
        }

    def get_scan_stats(self) -> dict:
        return dict(self.scan_stats)

    def _reject(self, start: int, error: FrameError) -> None:
        self.scan_stats["rejected"] += 1
        self.rejections.append({"offset": start, **error.to_dict()})
        warn(f"Rejected frame at offset {start}: {error}. Resyncing.", FrameWarning, stacklevel=3)

    def scan(self, text: str, limit: int | None = None) -> list[Mention]:
        """Decode frames left to right, stopping early once ``limit`` are found."""
        found: list[Mention] = []
        pos = 0
        while limit is None or len(found) < limit:
            start = text.find(FRAME_START, pos)
            if start == -1:
                break
            end = text.find(FRAME_END, start + 1)
            if end == -1:
                # No later START can be terminated either.
                self.scan_stats["unterminated"] += 1
                warn(f"Unterminated frame at offset {start}. Stopping scan.", FrameWarning, stacklevel=2)
                break

            self.scan_stats["candidates"] += 1
            # Every START before the last one ahead of END would fail the same way.
            last = text.rfind(FRAME_START, start + 1, end)
            if last != -1:
                self._reject(start, MalformedFrame(f"start marker at offset {last} before end marker"))
                pos = last
                continue

            try:
                record = parse_frame(text[start + 1 : end], self.config)
            except FrameError as e:
                self._reject(start, e)
                pos = start + 1
                continue

            found.append(Mention(start, record))
            self.scan_stats["records"] += 1
            pos = end + 1
        return found


def decode_all(text: str, config: CodecConfig = DEFAULT_CONFIG) -> list[Mention]:
    return FrameScanner(config).scan(text)


def decode_first(text: str, config: CodecConfig = DEFAULT_CONFIG) -> Record | None:
    """First decodable record in ``text``, or None when there is no mention."""
    mentions = FrameScanner(config).scan(text, limit=1)
    return mentions[0].record if mentions else None


def has_mentions(text: str, config: CodecConfig = DEFAULT_CONFIG) -> bool:
    return bool(FrameScanner(config).scan(text, limit=1))


def strip_invisible(text: str, config: CodecConfig = DEFAULT_CONFIG) -> str:
    """Drop every alphabet and marker symbol, leaving what a reader sees."""
    symbols = config.alphabet.symbols
    return "".join(ch for ch in text if ch not in symbols)
