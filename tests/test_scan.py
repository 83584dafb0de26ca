import warnings

import pytest

from zwm_core import (
    CodecConfig,
    FrameScanner,
    FrameWarning,
    Record,
    decode_all,
    decode_first,
    embed_mention,
    has_mentions,
    strip_invisible,
)
from zwm_core.protocol import DIGIT_POOL, FRAME_END, FRAME_SEP, FRAME_START

R1 = Record(kind="agent", name="Architect", mode="architect")
R2 = Record(kind="task", name="Fix flaky upload test", id="task-88")
M1 = embed_mention("@Agent[Architect]", R1)
M2 = embed_mention("@Task[Fix flaky upload test]", R2)


def corrupt(carrier: str) -> str:
    i = carrier.index(FRAME_SEP) + 1
    new = DIGIT_POOL[(DIGIT_POOL.index(carrier[i]) + 1) % 16]
    return carrier[:i] + new + carrier[i + 1:]


def test_no_frames():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        assert decode_all("just chatting, nothing hidden") == []
        assert decode_first("just chatting") is None
        assert not has_mentions("")


def test_isolation_and_order():
    sep = " then ask "
    text = "Hey " + M1 + sep + M2 + "!"
    mentions = decode_all(text)
    assert [m.record for m in mentions] == [R1, R2]
    assert mentions[0].offset == 4 + len("@Agent[Architect]")
    assert mentions[1].offset == 4 + len(M1) + len(sep) + len("@Task[Fix flaky upload test]")
    assert text[mentions[1].offset] == FRAME_START


def test_same_record_twice():
    mentions = decode_all(M1 + M1)
    assert [m.record for m in mentions] == [R1, R1]


def test_corrupt_frame_does_not_block_later_frames():
    text = corrupt(M2) + " and " + M1
    with pytest.warns(FrameWarning):
        mentions = decode_all(text)
    assert [m.record for m in mentions] == [R1]


def test_truncated_frame_followed_by_valid_frame():
    # The dangling START pairs with the next frame's END; scanning resumes
    # right after it and still finds the complete frame.
    cut = M2[: M2.index(FRAME_SEP) + 5]
    text = cut + " " + M1
    scanner = FrameScanner()
    with pytest.warns(FrameWarning):
        mentions = scanner.scan(text)
    assert [m.record for m in mentions] == [R1]
    stats = scanner.get_scan_stats()
    assert stats["rejected"] == 1
    assert stats["records"] == 1
    assert scanner.rejections[0]["code"] == "E_MALFORMED_FRAME"
    assert scanner.rejections[0]["offset"] == len("@Task[Fix flaky upload test]")


def test_unterminated_frame_at_end():
    text = M1 + " and " + M2[:-1]
    scanner = FrameScanner()
    with pytest.warns(FrameWarning):
        mentions = scanner.scan(text)
    assert [m.record for m in mentions] == [R1]
    assert scanner.scan_stats["unterminated"] == 1


def test_version_mismatch_is_skipped_not_decoded():
    newer = embed_mention("@Agent[Architect]", R1, CodecConfig(version=2))
    scanner = FrameScanner()
    with pytest.warns(FrameWarning):
        assert scanner.scan(newer) == []
    assert scanner.rejections[0]["code"] == "E_VERSION"
    assert decode_all(newer, CodecConfig(version=2))[0].record == R1


def test_stray_markers_in_text():
    text = FRAME_END + "hi " + FRAME_START + FRAME_END + " " + M1
    with pytest.warns(FrameWarning):
        assert decode_first(text) == R1


def test_decoder_base_must_match():
    binary = CodecConfig(base=2)
    carrier = embed_mention("@Agent[Architect]", R1, binary)
    assert decode_first(carrier, binary) == R1
    with pytest.warns(FrameWarning):
        assert decode_first(carrier) is None


def test_strip_removes_every_symbol():
    text = "a" + M1 + "b" + M2 + "c" + FRAME_SEP + DIGIT_POOL[15]
    stripped = strip_invisible(text)
    assert stripped == "a@Agent[Architect]b@Task[Fix flaky upload test]c"
    assert strip_invisible(stripped) == stripped


def test_strip_is_idempotent_on_arbitrary_text():
    samples = ["", "plain", M1 * 3, FRAME_START * 4 + "x", "mixed " + DIGIT_POOL[3] + " text"]
    for s in samples:
        once = strip_invisible(s)
        assert strip_invisible(once) == once


def test_strip_leaves_other_invisible_characters():
    zwj_emoji = chr(0x1F468) + chr(0x200D) + chr(0x1F4BB)
    assert strip_invisible(zwj_emoji) == zwj_emoji


def test_run_of_starts_is_rejected_once():
    scanner = FrameScanner()
    with pytest.warns(FrameWarning):
        mentions = scanner.scan(FRAME_START * 5000 + M1)
    assert [m.record for m in mentions] == [R1]
    assert mentions[0].offset == 5000 + len("@Agent[Architect]")
    assert scanner.scan_stats["candidates"] == 2
    assert scanner.scan_stats["rejected"] == 1
    assert scanner.rejections[0] == {
        "offset": 0,
        "code": "E_MALFORMED_FRAME",
        "message": "Frame structure is broken",
        "detail": f"start marker at offset {5000 + len('@Agent[Architect]')} before end marker",
    }


def test_run_of_starts_before_bare_end():
    scanner = FrameScanner()
    with pytest.warns(FrameWarning):
        assert scanner.scan(FRAME_START * 50000 + FRAME_END) == []
    assert scanner.scan_stats["candidates"] == 2
    assert scanner.scan_stats["rejected"] == 2


def test_decode_first_stops_at_first_record():
    text = M1 + " " + corrupt(M2) + " " + FRAME_START
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        assert decode_first(text) == R1
        assert has_mentions(text)
    scanner = FrameScanner()
    assert scanner.scan(text, limit=1) == [(len("@Agent[Architect]"), R1)]
    assert scanner.scan_stats["candidates"] == 1
