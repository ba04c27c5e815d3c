"""Provides the raw RSA transform used for encryption, decryption, signing and verification.

Facilitates "textbook" RSA only: a key is a modulus and an exponent, and every operation is one modular
exponentiation. Which of the four operations happens depends solely on the key half supplied and the numeral bases
of input and output. Keys travel as a single line of two base-62 numbers, `"<modulus> <exponent>"`, and nothing in
that line tells a public key from a private one.

Typical usage example:

    pk = RSAPrivKey.generate(2048)
    c = pk.pub.transform("Hi")
    r = pk.transform(c)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import warnings

from rsapipe import codec
from rsapipe import keygen

# Longest base-62 numeral of an 8192 bit integer, ceil(8192 / log2(62)).
MAXLEN: int = 1376


class RSAKey:
    """A modulus and an exponent, either the public or the private one.

    Attributes:
        mod: The modulus of the keypair.
        expo: The exponent of the key, whether private or public.
    """

    def __init__(self, mod: int, expo: int) -> None:
        self.mod = mod
        self.expo = expo

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RSAKey):
            return NotImplemented
        return (self.mod, self.expo) == (other.mod, other.expo)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(mod={self.mod}, expo={self.expo})"

    def c_rsa(self, message: int) -> int:
        """Performs core RSA operation. (Encrypt/Decrypt/Sign/Verify).

        Args:
            message: The int-marshalled message.

        Returns:
            message ** expo mod mod.
        """
        if not 0 <= message < self.mod:
            warnings.warn("Message representative outside [0, mod-1], result will not round-trip.", RuntimeWarning)
        return pow(message, self.expo, self.mod)

    def transform(self, message: str, base_in: int = 62, base_out: int = 62) -> str:
        """Decodes `message`, runs it through the RSA primitive and encodes the result.

        Args:
            message: The numeral to transform.
            base_in: Base `message` is written in. Defaults to 62.
            base_out: Base of the returned numeral. Defaults to 62.

        Returns:
            The transformed numeral, without leading zeros. A digest signed as "00ab..." verifies back to "ab...",
            so digests are to be compared as numbers rather than strings.

        Raises:
            CodecError: If `message` is not a valid base `base_in` numeral.
        """
        return codec.encode(self.c_rsa(codec.decode(message, base_in)), base_out)

    def export(self) -> str:
        """Single line representation of the key, `"<modulus> <exponent>"` in base 62."""
        expo = codec.E_VAL62 if self.expo == keygen.E_VAL else codec.encode(self.expo)
        return f"{codec.encode(self.mod)} {expo}"

    @classmethod
    def import_key(cls, text: str) -> "RSAKey":
        """Reads a key from its single line representation.

        Only the first two whitespace separated tokens are considered, anything following is ignored.

        Args:
            text: Text holding the key, usually the whole of stdin.

        Returns:
            The key.

        Raises:
            CodecError: If a token is missing, too long, or not a base 62 numeral, or the modulus is below 2.
        """
        tokens = text.split(maxsplit=2)
        if len(tokens) < 2:
            raise codec.CodecError("Expected a key of the form '<modulus> <exponent>'.")
        for token in tokens[:2]:
            if len(token) > MAXLEN:
                raise codec.CodecError(f"Key component longer than {MAXLEN} characters.")
        mod = codec.decode(tokens[0])
        if mod < 2:
            raise codec.CodecError(f"Modulus must be at least 2, got {mod}.")
        return cls(mod, codec.decode(tokens[1]))


class RSAPrivKey(RSAKey):
    """RSA Private Key, which also knows its public counterpart.

    Attributes:
        mod: The modulus of the keypair.
        expo: The private exponent of the key.
        pub: The public key of the key.
    """

    def __init__(self, mod: int, priv_exp: int, pub_exp: int = keygen.E_VAL) -> None:
        super().__init__(mod, priv_exp)
        self.pub: RSAKey = RSAKey(mod, pub_exp)

    @classmethod
    def generate(cls, size: int, source: keygen.RandBits | None = None) -> "RSAPrivKey":
        """Generates an RSA Private Key with a modulus of exactly `size` bits.

        Args:
            size: The size of the modulus in bits.
            source: Random bit supplier. Defaults to `secrets.randbits`.

        Returns:
            A newly generated RSA Private Key.
        """
        (n, pub), (_, d) = keygen.generate_key_pair(size, source)
        return cls(n, d, pub)


def public_line(text: str) -> str:
    """Derives the public key line from a private key line.

    The modulus token is copied verbatim, the exponent replaced by the fixed public exponent.

    Args:
        text: The private key line, `"<modulus> <private exponent>"`.

    Returns:
        The public key line, `"<modulus> H33"`.

    Raises:
        CodecError: If `text` holds no space separated modulus.
    """
    mod, sep, _ = text.partition(" ")
    if not sep or not mod:
        raise codec.CodecError("Expected a private key of the form '<modulus> <exponent>'.")
    return f"{mod} {codec.E_VAL62}"
