"""Positional numeral codec used to move integers through the command line.

Keys, ciphertexts and plaintexts travel as base-62 strings, message digests for signing as base-16 and diagnostic
output as base-10. The alphabet is fixed: previously generated keys must keep decoding to the same integers.

Typical usage example:

    encode(65537)          # "H33"
    decode("ff", 16)       # 255
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import string

ALPHABET: str = string.digits + string.ascii_uppercase + string.ascii_lowercase
# Bases up to 36 use a single case, like the classic hexadecimal digits.
_LOWER_ALPHABET: str = string.digits + string.ascii_lowercase

# 65537 in base 62. Written out literally, never derived.
E_VAL62: str = "H33"


class CodecError(ValueError):
    """Raised when a string is not a valid numeral in the requested base."""


def _alphabet(base: int) -> str:
    if not 2 <= base <= len(ALPHABET):
        raise ValueError(f"Base must be in range [2, {len(ALPHABET)}], got {base}.")
    if base <= 36:
        return _LOWER_ALPHABET[:base]
    return ALPHABET[:base]


def encode(num: int, base: int = 62) -> str:
    """Encodes a non-negative integer as a numeral in the given base.

    Args:
        num: The integer to encode. Must be >= 0.
        base: Target base, in range [2, 62]. Defaults to 62.

    Returns:
        The numeral, most significant digit first. Zero encodes as "0".

    Raises:
        ValueError: If `num` is negative or `base` unsupported.
    """
    digits = _alphabet(base)
    if num < 0:
        raise ValueError("Only non-negative integers can be encoded.")
    if num == 0:
        return digits[0]
    out = []
    while num:
        num, rem = divmod(num, base)
        out.append(digits[rem])
    return "".join(reversed(out))


def decode(text: str, base: int = 62) -> int:
    """Decodes a numeral in the given base into an integer.

    Bases up to 36 accept either letter case, larger bases are case-sensitive.

    Args:
        text: The numeral to decode.
        base: Source base, in range [2, 62]. Defaults to 62.

    Returns:
        The decoded non-negative integer.

    Raises:
        CodecError: If `text` is empty or holds a symbol outside the base's alphabet.
    """
    digits = _alphabet(base)
    if base <= 36:
        text = text.lower()
    if not text:
        raise CodecError(f"Empty string is not a base {base} number.")
    lookup = {sym: val for val, sym in enumerate(digits)}
    num = 0
    for pos, sym in enumerate(text):
        val = lookup.get(sym)
        if val is None:
            raise CodecError(f"Invalid base {base} digit {sym!r} at position {pos}.")
        num = num * base + val
    return num
