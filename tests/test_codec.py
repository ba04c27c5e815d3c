# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import pytest

from rsapipe import codec

known_values = [
    (0, 62, "0"),
    (9, 62, "9"),
    (10, 62, "A"),
    (35, 62, "Z"),
    (36, 62, "a"),
    (61, 62, "z"),
    (62, 62, "10"),
    (65537, 62, "H33"),
    (3843, 62, "zz"),
    (255, 16, "ff"),
    (48879, 16, "beef"),
    (0, 10, "0"),
    (1234567890, 10, "1234567890"),
    (5, 2, "101"),
]


def test_alphabet():
    assert codec.ALPHABET == "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"


def test_public_exponent_constant():
    assert codec.E_VAL62 == "H33"
    assert codec.encode(65537) == codec.E_VAL62
    assert codec.decode(codec.E_VAL62) == 65537


@pytest.mark.parametrize("num,base,text", known_values)
def test_encode_known(num, base, text):
    assert codec.encode(num, base) == text


@pytest.mark.parametrize("num,base,text", known_values)
def test_decode_known(num, base, text):
    assert codec.decode(text, base) == num


@pytest.mark.parametrize("base", [10, 16, 62])
def test_round_trip(base):
    for num in (0, 1, base - 1, base, 2**64 + 12345, 2**8192 - 1):
        assert codec.decode(codec.encode(num, base), base) == num


def test_encode_matches_builtin_hex():
    num = 0xDEADBEEF_CAFEBABE_0123456789
    assert codec.encode(num, 16) == format(num, "x")
    assert codec.encode(num, 10) == str(num)


def test_decode_hex_case_insensitive():
    assert codec.decode("DEADbeef", 16) == 0xDEADBEEF


def test_decode_base62_case_sensitive():
    assert codec.decode("a") == 36
    assert codec.decode("A") == 10


def test_max_key_length_fits():
    assert len(codec.encode(2**8192 - 1)) == 1376


@pytest.mark.parametrize("text,base", [
    ("", 62),
    ("", 16),
    ("-1", 62),
    ("H3 3", 62),
    ("H3+", 62),
    ("fg", 16),
    ("0x1f", 16),
    ("1a", 10),
    ("12_3", 10),
    ("ä", 62),
])
def test_decode_rejects(text, base):
    with pytest.raises(codec.CodecError):
        codec.decode(text, base)


def test_codec_error_is_value_error():
    assert issubclass(codec.CodecError, ValueError)


@pytest.mark.parametrize("base", [0, 1, 63])
def test_unsupported_base(base):
    with pytest.raises(ValueError):
        codec.encode(10, base)
    with pytest.raises(ValueError):
        codec.decode("1", base)


def test_encode_rejects_negative():
    with pytest.raises(ValueError):
        codec.encode(-1)
