"""File-level command-line front end for the AES stream codec.

Usage:
    aeslab-file plain.txt cipher.bin -k key.bin -e             # CBC (default)
    aeslab-file plain.txt cipher.bin -k key.bin -e -m ecb
    aeslab-file cipher.bin plain.txt -k key.bin -d -f          # overwrite output
    aeslab-file --test                                         # run self-test

Exit codes follow errno: EBADF for files that cannot be opened (or a key file
that is too short), EINVAL for bad arguments and any encryption error.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import argparse
import errno
import logging
import os
import sys
import tempfile
from pathlib import Path
from typing import List, Optional

from aeslab.cipher.modes import Mode
from aeslab.codec import AES
from aeslab.config import load_settings
from aeslab.errors import AESError

logger = logging.getLogger("aeslab.cli")

MIN_KEY_BYTES = 16
MAX_KEY_BYTES = 32


class CLIError(Exception):
    def __init__(self, message: str, code: int):
        super().__init__(message)
        self.code = code


def build_parser(default_mode: str = "cbc") -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aeslab-file",
        description="Encrypt or decrypt a file with AES-128/192/256 (ECB or CBC).",
    )
    parser.add_argument("input", nargs="?", help="The file to encrypt/decrypt")
    parser.add_argument(
        "output", nargs="?",
        help="Where the output is written. Will not overwrite an existing file unless -f is used.",
    )
    parser.add_argument(
        "--key", "-k", metavar="KeyFilepath",
        help="The file containing the AES key. It must contain exactly 16, 24, or 32 bytes.",
    )
    parser.add_argument(
        "--encrypt", "-e", action="store_true",
        help="Encrypt the input file. (Mutually exclusive with --decrypt.)",
    )
    parser.add_argument(
        "--decrypt", "-d", action="store_true",
        help="Decrypt the input file. (Mutually exclusive with --encrypt.)",
    )
    parser.add_argument(
        "--mode", "-m", default=default_mode, type=str.lower,
        help=(
            f"Mode of operation for encryption: cbc or ecb (default: {default_mode}). "
            "The mode is stored in the header of an encrypted file, so this is ignored with -d."
        ),
    )
    parser.add_argument("--force", "-f", action="store_true", help="Overwrite the output file if it exists.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    parser.add_argument(
        "--test", "-t", action="store_true",
        help="Instead of encrypting/decrypting a file, run the self-test suite.",
    )
    return parser


def _validate(args: argparse.Namespace) -> None:
    if args.encrypt == args.decrypt:
        raise CLIError("Specify exactly 1 of --encrypt and --decrypt.", errno.EINVAL)
    if args.mode not in {"cbc", "ecb"}:
        raise CLIError("--mode must be cbc or ecb", errno.EINVAL)
    if not args.input or not args.output:
        raise CLIError("Both input and output files are required.", errno.EINVAL)
    if not args.key:
        raise CLIError("--key is required.", errno.EINVAL)


def read_key_file(path: str) -> bytes:
    try:
        with open(path, "rb") as fh:
            key = fh.read(MAX_KEY_BYTES + 1)
    except OSError as e:
        raise CLIError(f"Failed to open key file: {path} ({e.strerror})", errno.EBADF) from e
    if len(key) < MIN_KEY_BYTES:
        raise CLIError(f"Failed to read {MIN_KEY_BYTES}-byte AES key from key file: {path}", errno.EBADF)
    if len(key) > MAX_KEY_BYTES:
        raise CLIError(
            f"Key is larger than {MAX_KEY_BYTES} bytes. The AES maximum keysize is {MAX_KEY_BYTES} bytes.",
            errno.EINVAL,
        )
    return key


def run_file_operation(args: argparse.Namespace, *, workers: int = 1) -> None:
    key = read_key_file(args.key)

    in_path = Path(args.input)
    out_path = Path(args.output)
    if out_path.exists() and not args.force:
        raise CLIError(
            f"Force option (-f) isn't used, and output file already exists: {out_path}",
            errno.EINVAL,
        )

    try:
        infile = open(in_path, "rb")
    except OSError as e:
        raise CLIError(f"Failed to open input file: {in_path} ({e.strerror})", errno.EBADF) from e

    with infile:
        try:
            aes = AES(key, workers=workers)
        except AESError as e:
            raise CLIError(str(e), errno.EINVAL) from e

        # Write to a sibling temp file; only a fully successful run is renamed into place
        try:
            tmp = tempfile.NamedTemporaryFile(
                mode="wb", dir=out_path.parent, prefix=f".{out_path.name}.", delete=False,
            )
        except OSError as e:
            raise CLIError(f"Failed to open output file: {out_path} ({e.strerror})", errno.EBADF) from e

        try:
            with tmp:
                if args.encrypt:
                    mode = Mode.from_name(args.mode)
                    logger.debug("Plaintext file: %s", in_path)
                    logger.debug("Ciphertext file: %s", out_path)
                    logger.debug("Key file: %s", args.key)
                    logger.debug("Mode: %s (%d)", mode.name.lower(), mode.value)
                    aes.encrypt(infile, tmp, mode)
                else:
                    logger.debug("Ciphertext file: %s", in_path)
                    logger.debug("Plaintext file: %s", out_path)
                    logger.debug("Key file: %s", args.key)
                    aes.decrypt(infile, tmp)
            os.replace(tmp.name, out_path)
        except AESError as e:
            os.unlink(tmp.name)
            raise CLIError(str(e), errno.EINVAL) from e
        except BaseException:
            os.unlink(tmp.name)
            raise


def main(argv: Optional[List[str]] = None) -> int:
    settings = load_settings()
    parser = build_parser(settings.default_mode)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, settings.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.test:
        from aeslab.evaluation import run_self_test

        report = run_self_test(settings)
        print(report.to_summary())
        return 0 if report.all_pass else errno.EINVAL

    try:
        _validate(args)
        logger.info("%s %s -> %s", "Encrypting" if args.encrypt else "Decrypting", args.input, args.output)
        run_file_operation(args, workers=settings.workers)
    except CLIError as e:
        print(f"Error: {e}", file=sys.stderr)
        return e.code
    return 0


if __name__ == "__main__":
    sys.exit(main())
