from __future__ import annotations

import hashlib
import json
from pathlib import Path

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from zwm_core import DEFAULT_CONFIG, CodecConfig, FrameScanner, strip_invisible

MENTIONS_SCHEMA = pa.schema(
    [
        ("message_index", pa.int32()),
        ("ts", pa.string()),
        ("sender", pa.string()),
        ("offset", pa.int32()),
        ("kind", pa.string()),
        ("name", pa.string()),
        ("id", pa.string()),
        ("mode", pa.string()),
        ("extra_json", pa.string()),
        ("visible_text", pa.string()),
    ]
)


class TranscriptJudge:
    """Scans every message of a JSONL chat transcript for mention frames.

    - One scanner per message, so a corrupt frame never leaks into the next message.
    - Scan counters are summed across messages.
    """

    def __init__(self, transcript_path: Path, config: CodecConfig = DEFAULT_CONFIG):
        self.transcript_path = Path(transcript_path)
        self.config = config
        self.rows: list[dict] = []
        self.rejections: list[dict] = []
        self.messages = 0
        self.scan_stats = {
            "candidates": 0,
            "records": 0,
            "rejected": 0,
            "unterminated": 0,
        }

        self._scan_messages()

    def _scan_messages(self) -> None:
        with open(self.transcript_path, "rb") as f:
            for line in f:
                if not line.strip():
                    continue
                msg = json.loads(line)
                idx = self.messages
                self.messages += 1

                text = msg["text"]
                scanner = FrameScanner(self.config)
                mentions = scanner.scan(text)
                for key, value in scanner.get_scan_stats().items():
                    self.scan_stats[key] += value
                for rej in scanner.rejections:
                    self.rejections.append({"message_index": idx, **rej})

                visible = strip_invisible(text, self.config)
                for offset, record in mentions:
                    self.rows.append(
                        {
                            "message_index": idx,
                            "ts": msg.get("ts"),
                            "sender": msg.get("sender"),
                            "offset": offset,
                            "kind": record.kind,
                            "name": record.name,
                            "id": record.id,
                            "mode": record.mode,
                            "extra_json": None
                            if record.extra is None
                            else json.dumps(dict(record.extra), sort_keys=True, ensure_ascii=False),
                            "visible_text": visible,
                        }
                    )

    def get_scan_stats(self) -> dict:
        return dict(self.scan_stats)


def compile_transcript(
    transcript_path: Path,
    out_path: Path,
    config: CodecConfig = DEFAULT_CONFIG,
) -> dict:
    """Build evidence/mentions.parquet and manifest.json for a transcript."""
    transcript_path = Path(transcript_path)
    out_path = Path(out_path)
    source_hash = hashlib.sha256(transcript_path.read_bytes()).hexdigest()

    judge = TranscriptJudge(transcript_path, config)

    (out_path / "evidence").mkdir(parents=True, exist_ok=True)
    df = pd.DataFrame(judge.rows, columns=MENTIONS_SCHEMA.names)
    table = pa.Table.from_pandas(df, schema=MENTIONS_SCHEMA, preserve_index=False)
    pq.write_table(table, out_path / "evidence/mentions.parquet")

    manifest = {
        "source_hash": source_hash,
        "codec": {
            "base": config.base,
            "version": config.version,
            "checksum": config.checksum,
        },
        "messages": judge.messages,
        "mentions": len(judge.rows),
        "scan_stats": judge.get_scan_stats(),
        "rejections": judge.rejections,
    }
    man_bytes = json.dumps(manifest, sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    (out_path / "manifest.json").write_bytes(man_bytes)
    return manifest
