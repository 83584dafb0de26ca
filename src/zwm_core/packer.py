"""Byte <-> digit conversion for an arbitrary small radix."""
from __future__ import annotations

from .alphabet import field_width
from .errors import MalformedPayload


def encode_int(value: int, width: int, base: int) -> list[int]:
    """Big-endian fixed-width digits of ``value``."""
    if value < 0 or value >= base ** width:
        raise ValueError(f"{value} does not fit in {width} base-{base} digits")
    out = [0] * width
    for i in range(width - 1, -1, -1):
        value, out[i] = divmod(value, base)
    return out


def decode_int(digits: list[int], base: int) -> int:
    value = 0
    for d in digits:
        value = value * base + d
    return value


def pack(data: bytes, base: int) -> list[int]:
    width = field_width(256, base)
    digits: list[int] = []
    for b in data:
        digits.extend(encode_int(b, width, base))
    return digits


def unpack(digits: list[int], base: int) -> bytes:
    width = field_width(256, base)
    if len(digits) % width:
        raise MalformedPayload(f"{len(digits)} digits is not a whole number of {width}-digit bytes")

    out = bytearray()
    for i in range(0, len(digits), width):
        group = digits[i : i + width]
        if any(not 0 <= d < base for d in group):
            raise MalformedPayload(f"digit out of range for base {base} at {i}")
        value = decode_int(group, base)
        # Radixes that are not powers of two can overshoot a byte.
        if value > 0xFF:
            raise MalformedPayload(f"digit group at {i} decodes to {value}, not a byte")
        out.append(value)
    return bytes(out)
