"""
Command-line front end.

    envcrypto encrypt [source] [output] [key_var]
    envcrypto decrypt [source] [output] [key_var]

Defaults come from ``EnvCryptoConfig`` (``.env``, ``.env.encrypted``,
``ENV_CRYPTO_KEY``). Engine errors are reported as a single line on
stderr with exit status 1; variable values are never printed.
"""

from __future__ import annotations

import argparse
import sys
from typing import Final, Optional, Sequence

from envcrypto import __version__
from envcrypto.core.config import EnvCryptoConfig
from envcrypto.core.errors import EnvCryptoError
from envcrypto.core.file_ops.decrypt import decrypt_env_file
from envcrypto.core.file_ops.encrypt import encrypt_env_file, write_private_file
from envcrypto.core.file_ops.parser import format_env
from envcrypto.core.logging import configure_logging
from envcrypto.utils.validators import validate_path

COMMANDS: Final[tuple[str, ...]] = ("encrypt", "decrypt")

# Flags argparse answers on its own, with or without a command
_INFO_FLAGS: Final[frozenset[str]] = frozenset({"-h", "--help", "--version"})

USAGE: Final[str] = """\
Usage:
  envcrypto encrypt [sourcePath] [outputPath] [keyEnvVar]
  envcrypto decrypt [sourcePath] [outputPath] [keyEnvVar]

You can also run the module directly:
  python -m envcrypto encrypt [sourcePath] [outputPath] [keyEnvVar]
  python -m envcrypto decrypt [sourcePath] [outputPath] [keyEnvVar]
"""


def build_parser(config: EnvCryptoConfig) -> argparse.ArgumentParser:
    defaults = config.defaults

    parser = argparse.ArgumentParser(
        prog="envcrypto",
        description="Encrypt and decrypt .env files with AES-256-GCM.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    encrypt = subparsers.add_parser("encrypt", help="encrypt a plaintext env file")
    encrypt.add_argument("source", nargs="?", default=defaults.source_path)
    encrypt.add_argument("output", nargs="?", default=defaults.output_path)
    encrypt.add_argument("key_var", nargs="?", default=defaults.variable_name)

    decrypt = subparsers.add_parser("decrypt", help="decrypt an encrypted env file")
    decrypt.add_argument("source", nargs="?", default=defaults.output_path)
    decrypt.add_argument("output", nargs="?", default=defaults.plaintext_path)
    decrypt.add_argument("key_var", nargs="?", default=defaults.variable_name)

    return parser


def _run_encrypt(args: argparse.Namespace) -> None:
    written = encrypt_env_file(args.source, args.output, args.key_var)
    print(f"Encrypted environment file saved to {written}")


def _run_decrypt(args: argparse.Namespace) -> None:
    variables = decrypt_env_file(args.source, args.key_var)
    print(f"Decrypted variables: {', '.join(variables) or '(none)'}")

    if args.output:
        output = validate_path(args.output)
        write_private_file(output, format_env(variables))
        print(f"Decrypted environment saved to {output}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the CLI and return the process exit status."""
    argv = list(sys.argv[1:] if argv is None else argv)

    # A missing or unknown command gets the help text, wherever flags put it
    command = next((arg for arg in argv if not arg.startswith("-")), None)
    if command not in COMMANDS and _INFO_FLAGS.isdisjoint(argv):
        print(USAGE)
        return 0

    try:
        config = EnvCryptoConfig.get_instance()
    except ValueError as e:
        print(f"error: invalid configuration: {e}", file=sys.stderr)
        return 1

    args = build_parser(config).parse_args(argv)

    configure_logging(config.logging, verbose=args.verbose)

    try:
        if args.command == "encrypt":
            _run_encrypt(args)
        else:
            _run_decrypt(args)
    except (EnvCryptoError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except UnicodeDecodeError:
        print(f"error: {args.source} is not valid UTF-8 text", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
