"""Raw RSA primitives exposed as pipeable command line operations.

Generates key pairs whose modulus has exactly the requested amount of bits, derives public keys from private ones
and runs the textbook RSA transform for encryption, decryption, signing and verification. Integers travel as
base-62 numerals, message digests as base-16.

Typical usage example:

    pk = RSAPrivKey.generate(2048)
    line = pk.export()
    c = RSAKey.import_key(public_line(line)).transform("Hi")
    r = pk.transform(c)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from rsapipe.codec import CodecError
from rsapipe.codec import decode
from rsapipe.codec import encode
from rsapipe.keygen import check_prime
from rsapipe.keygen import EntropyError
from rsapipe.keygen import generate_key_pair
from rsapipe.keygen import generate_prime
from rsapipe.keygen import generate_primes
from rsapipe.keygen import random_key
from rsapipe.keygen import random_number
from rsapipe.rsa import public_line
from rsapipe.rsa import RSAKey
from rsapipe.rsa import RSAPrivKey

__version__ = "0.0.1"
__all__ = [
    "RSAKey",
    "RSAPrivKey",
    "public_line",
    "encode",
    "decode",
    "CodecError",
    "EntropyError",
    "check_prime",
    "generate_prime",
    "generate_primes",
    "generate_key_pair",
    "random_key",
    "random_number",
]
