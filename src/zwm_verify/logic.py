from pathlib import Path

from zwm_core import DEFAULT_CONFIG, CodecConfig, FrameScanner, carrier_length
from zwm_core.errors import ERRORS


def load_carrier(path: Path) -> str:
    # Bytes, not text mode: a CRLF counts as two units.
    return Path(path).read_bytes().decode("utf-8")


def _fail(errors: list) -> dict:
    return {"status": "FAIL", "error_count": len(errors), "errors": errors}


def verify_carrier(text: str, config: CodecConfig = DEFAULT_CONFIG) -> dict:
    errors = []

    length = carrier_length(text)
    if length > config.max_length:
        errors.append({"code": "E_CAPACITY", "message": ERRORS["E_CAPACITY"], "length": length, "limit": config.max_length})

    scanner = FrameScanner(config)
    mentions = scanner.scan(text)
    errors.extend(scanner.rejections)
    if scanner.scan_stats["unterminated"]:
        errors.append({"code": "E_MALFORMED_FRAME", "message": ERRORS["E_MALFORMED_FRAME"], "detail": "missing end marker"})
    if not mentions:
        errors.append({"code": "E_NO_FRAMES", "message": ERRORS["E_NO_FRAMES"]})

    if errors:
        return _fail(errors)

    return {
        "status": "PASS",
        "error_count": 0,
        "errors": [],
        "length": length,
        "mentions": [{"offset": m.offset, **m.record.to_dict()} for m in mentions],
    }
