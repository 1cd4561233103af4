"""
Command line entry point: ``pgp-encrypt``.

Exit codes: 0 success, 1 invalid input, 2 key error, 3 encryption error,
4 I/O error. Every failure prints a single ``Error: ...`` line to stderr.
"""

import sys
from collections.abc import Sequence
from pathlib import Path

import click
import structlog

from pgp_encrypt import __version__
from pgp_encrypt.config import EncryptConfig, OutputMode, OutputNaming
from pgp_encrypt.exceptions import (
    EXIT_INVALID_INPUT,
    EXIT_SUCCESS,
    InvalidInputError,
    PgpEncryptError,
)
from pgp_encrypt.logging_config import configure_logging
from pgp_encrypt.services.encryptor import FolderEncryptor

logger = structlog.get_logger(__name__)


def build_config(
    input_dir: Path,
    key_file: Path,
    output_dir: Path | None,
    in_place: bool,
    keep_extension: bool,
) -> EncryptConfig:
    """
    Turn parsed flags into a run configuration.

    Raises:
        InvalidInputError: If the mode flags are missing or conflict.
    """
    if in_place == (output_dir is not None):
        msg = "Exactly one of --output or --in-place is required"
        raise InvalidInputError(msg)
    if in_place and keep_extension:
        msg = "--keep-extension only applies with --output"
        raise InvalidInputError(msg)
    try:
        return EncryptConfig(
            input_dir=input_dir,
            key_file=key_file,
            output_dir=output_dir,
            mode=OutputMode.IN_PLACE if in_place else OutputMode.MIRROR,
            naming=OutputNaming.APPEND if keep_extension else OutputNaming.REPLACE,
        )
    except ValueError as e:
        raise InvalidInputError(str(e)) from e


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="pgp-encrypt")
@click.option(
    "-f",
    "--folder",
    "input_dir",
    required=True,
    type=click.Path(path_type=Path),
    metavar="INPUT_DIR",
    help="Input folder containing files to encrypt.",
)
@click.option(
    "-k",
    "--key",
    "key_file",
    required=True,
    type=click.Path(path_type=Path),
    metavar="KEY_FILE",
    help="Public key file path.",
)
@click.option(
    "-o",
    "--output",
    "output_dir",
    type=click.Path(path_type=Path),
    default=None,
    metavar="OUTPUT_DIR",
    help="Output folder for encrypted files, mirroring the input tree.",
)
@click.option("--in-place", is_flag=True, help="Replace every file with its ciphertext.")
@click.option(
    "--keep-extension",
    is_flag=True,
    help="Append .pgp to output names instead of replacing the extension.",
)
@click.option("-v", "--verbose", count=True, help="Increase log output (repeatable).")
@click.option("-q", "--quiet", is_flag=True, help="Only log errors.")
def cli(
    input_dir: Path,
    key_file: Path,
    output_dir: Path | None,
    in_place: bool,
    keep_extension: bool,
    verbose: int,
    quiet: bool,
) -> None:
    """Encrypt every file of INPUT_DIR to the OpenPGP key in KEY_FILE."""
    configure_logging(-1 if quiet else verbose)
    config = build_config(input_dir, key_file, output_dir, in_place, keep_extension)
    summary = FolderEncryptor(config).run()
    logger.info("Done", encrypted=summary.encrypted, skipped=summary.skipped)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command and map its outcome to an exit code."""
    try:
        cli.main(
            args=list(argv) if argv is not None else None,
            prog_name="pgp-encrypt",
            standalone_mode=False,
        )
    except click.ClickException as e:
        click.echo(f"Error: {e.format_message()}", err=True)
        return EXIT_INVALID_INPUT
    except click.Abort:
        # Ctrl-C or EOF at a prompt; files already written stay on disk.
        click.echo("Error: Aborted", err=True)
        return EXIT_INVALID_INPUT
    except PgpEncryptError as e:
        click.echo(f"Error: {e}", err=True)
        return e.exit_code
    return EXIT_SUCCESS


def run() -> None:
    sys.exit(main())
