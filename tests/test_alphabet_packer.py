import unicodedata

import pytest

from zwm_core import Alphabet, MalformedPayload, UnknownSymbol
from zwm_core.alphabet import field_width
from zwm_core.packer import decode_int, encode_int, pack, unpack
from zwm_core.protocol import DIGIT_POOL, FRAME_END, FRAME_SEP, FRAME_START


def test_symbols_are_distinct_and_invisible():
    every = list(DIGIT_POOL) + [FRAME_START, FRAME_SEP, FRAME_END]
    assert len(set(every)) == len(every) == 19
    for s in every:
        assert unicodedata.category(s) in {"Cf", "Mn"}, f"U+{ord(s):04X}"
        assert ord(s) <= 0xFFFF


@pytest.mark.parametrize("base", [1, 17, 0])
def test_base_out_of_range(base):
    with pytest.raises(ValueError):
        Alphabet(base)


@pytest.mark.parametrize("base,width", [(2, 8), (3, 6), (4, 4), (8, 3), (16, 2)])
def test_digits_per_byte(base, width):
    assert Alphabet(base).digits_per_byte == width


def test_digit_symbol_bijection():
    alpha = Alphabet(16)
    assert [alpha.symbol_to_digit(alpha.digit_to_symbol(d)) for d in range(16)] == list(range(16))
    assert len(set(alpha.digits)) == 16


def test_unknown_symbol():
    with pytest.raises(UnknownSymbol):
        Alphabet(16).symbol_to_digit("a")
    # A pool symbol beyond the base is not a digit either.
    with pytest.raises(UnknownSymbol):
        Alphabet(2).symbol_to_digit(DIGIT_POOL[5])
    with pytest.raises(UnknownSymbol):
        Alphabet(16).symbol_to_digit(FRAME_SEP)


def test_marker_symbols_counted_for_every_base():
    assert Alphabet(2).symbols == Alphabet(16).symbols
    assert FRAME_START in Alphabet(2).symbols


def test_field_width():
    assert field_width(16, 16) == 1
    assert field_width(17, 16) == 2
    assert field_width(65536, 16) == 4
    assert field_width(16, 2) == 4


def test_int_fields():
    assert encode_int(0x2A, 2, 16) == [2, 10]
    assert decode_int([2, 10], 16) == 0x2A
    assert encode_int(5, 4, 2) == [0, 1, 0, 1]
    with pytest.raises(ValueError):
        encode_int(256, 2, 16)


def test_pack_hex():
    assert pack(b"\x00\xff\x1e", 16) == [0, 0, 15, 15, 1, 14]
    assert unpack([0, 0, 15, 15, 1, 14], 16) == b"\x00\xff\x1e"


@pytest.mark.parametrize("base", [2, 3, 4, 5, 7, 8, 10, 16])
def test_pack_every_byte(base):
    data = bytes(range(256))
    digits = pack(data, base)
    assert len(digits) == 256 * field_width(256, base)
    assert unpack(digits, base) == data


def test_unpack_partial_byte():
    with pytest.raises(MalformedPayload):
        unpack([1, 2, 3], 16)


def test_unpack_overflowing_group():
    # 222222 in base 3 is 728, not a byte.
    with pytest.raises(MalformedPayload):
        unpack([2] * 6, 3)


def test_unpack_digit_out_of_range():
    with pytest.raises(MalformedPayload):
        unpack([16, 0], 16)


def test_markers_avoid_standardized_selectors():
    # VS1-VS3 take part in CJK and math sequences, VS15/VS16 in emoji.
    taken = {chr(cp) for cp in (0xFE00, 0xFE01, 0xFE02, 0xFE0E, 0xFE0F)}
    assert not taken & {FRAME_START, FRAME_SEP, FRAME_END}
    joiners = {chr(0x200C), chr(0x200D), chr(0xFEFF), chr(0x200E), chr(0x200F)}
    assert not joiners & set(DIGIT_POOL)
