"""The Command Line Interface for the utility, built to be chained through shell pipes.

Every invocation performs one operation. Keys are handed from one invocation to the next on stdin, results are
written to stdout, one value per line. Argument problems are reported on stdout with a fixed message and do not
change the exit status.

Typical usage example:

    rsapipe gen pair 2048 > pair.txt
    head -n 1 pair.txt | rsapipe pub
    tail -n 1 pair.txt | rsapipe enc Hi
    OR
    python -m rsapipe gen prime 512
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import contextlib
import logging
import sys
import typing

import rsapipe
from rsapipe import codec
from rsapipe import keygen
from rsapipe import rsa

USAGE_ERROR = "error: missing/incorrect argument(s)"


class UsageError(Exception):
    """Raised instead of exiting when the command line cannot be parsed."""


class ArgumentParser(argparse.ArgumentParser):
    """Argument parser that leaves reporting of parse errors to `main`."""

    def error(self, message: str) -> typing.NoReturn:
        raise UsageError(message)


def _gen_private(bits: int) -> list[str]:
    return [rsa.RSAPrivKey.generate(bits).export()]


def _gen_pair(bits: int) -> list[str]:
    pk = rsa.RSAPrivKey.generate(bits)
    return [pk.export(), pk.pub.export()]


class GenData(typing.NamedTuple):
    description: str
    action: typing.Callable[[int], list[str]]
    minimum: int = 1
    maximum: int | None = None


gen_dict: dict[str, GenData] = {
    "random":
        GenData("Random base-10 number of exactly <bits> bits.",
                lambda bits: [codec.encode(keygen.random_number(bits), 10)]),
    "key":
        GenData("Random base-62 number of exactly <bits> bits.", lambda bits: [codec.encode(keygen.random_key(bits))]),
    "prime":
        GenData("Base-10 prime of exactly <bits> bits.",
                lambda bits: [codec.encode(keygen.generate_prime(bits), 10)],
                minimum=2),
    "private":
        GenData("Private key '<n> <d>' with a modulus of exactly <bits> bits.",
                _gen_private,
                minimum=keygen.MIN_KEY_BITS,
                maximum=keygen.MAX_KEY_BITS),
    "pair":
        GenData("Private key line followed by its public key line.",
                _gen_pair,
                minimum=keygen.MIN_KEY_BITS,
                maximum=keygen.MAX_KEY_BITS),
}

# Numeral bases (input, output) of the message for each transform.
transforms: dict[str, tuple[str, int, int]] = {
    "enc": ("Encrypt a base-62 message with the public key on stdin.", 62, 62),
    "dec": ("Decrypt a base-62 message with the private key on stdin.", 62, 62),
    "sign": ("Sign a base-16 digest with the private key on stdin.", 16, 62),
    "verify": ("Recover the base-16 digest from a base-62 signature with the public key on stdin.", 62, 16),
}

corep = ArgumentParser(prog="rsapipe", description="Raw RSA primitives as pipeable commands.")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {rsapipe.__version__}")
corep.add_argument("--verbose", "-V", action="store_true", help="Log generation diagnostics to stderr")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands", required=True)

gen = commands.add_parser("gen",
                          help="Generation utility.",
                          epilog="\n".join(f"{kind} - {data.description}" for kind, data in gen_dict.items()),
                          formatter_class=argparse.RawDescriptionHelpFormatter)
gen.add_argument("kind", choices=list(gen_dict), help="What to generate.")
gen.add_argument("bits", type=int, help="Bit length of the result.")

commands.add_parser("pub", help="Derive the public key line from the private key line on stdin.")

for verb, (description, _, _) in transforms.items():
    tparser = commands.add_parser(verb, help=description)
    tparser.add_argument("message", help="The message to transform.")


def check_bits(kind: str, bits: int) -> None:
    """Validate the requested bit length against the generator's range."""
    data = gen_dict[kind]
    if bits < data.minimum or (data.maximum is not None and bits > data.maximum):
        raise UsageError(f"{kind} needs bits in range [{data.minimum}, {data.maximum or 'inf'}], got {bits}.")


@contextlib.contextmanager
def verbose_logging(enabled: bool) -> typing.Iterator[None]:
    """Sends the package's debug diagnostics to stderr for the duration of the block."""
    if not enabled:
        yield
        return
    pkg_logger = logging.getLogger("rsapipe")
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    level = pkg_logger.level
    pkg_logger.addHandler(handler)
    pkg_logger.setLevel(logging.DEBUG)
    try:
        yield
    finally:
        pkg_logger.removeHandler(handler)
        pkg_logger.setLevel(level)


def run(args: argparse.Namespace, stdin: typing.TextIO) -> list[str]:
    """Executes the parsed command, returning the output lines."""
    match args.subcommand:
        case "gen":
            check_bits(args.kind, args.bits)
            return gen_dict[args.kind].action(args.bits)
        case "pub":
            return [rsa.public_line(stdin.readline())]
        case _:
            _, base_in, base_out = transforms[args.subcommand]
            key = rsa.RSAKey.import_key(stdin.read())
            return [key.transform(args.message, base_in, base_out)]


def main(argv: list[str] | None = None) -> None:
    """Core CLI entry point."""
    try:
        args = corep.parse_args(argv)
    except UsageError:
        print(USAGE_ERROR)
        return
    try:
        with verbose_logging(args.verbose):
            lines = run(args, sys.stdin)
    except UsageError:
        print(USAGE_ERROR)
        return
    except codec.CodecError as exc:
        print(f"error: {exc}")
        return
    for line in lines:
        print(line)


if __name__ == "__main__":
    main()
