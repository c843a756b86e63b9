
from __future__ import annotations
import logging
from typing import Callable, Iterator, List, Optional

import typer

from dotsig import DotsigError, UsageError, __version__
from dotsig.resolver import read_inputs, require_input, wants_stdin
from .runners.common import (
    RunOptions,
    acquire_passphrase,
    configure_logging,
    create_identity,
    provision_identity,
)
from .runners.sign import sign_documents
from .runners.verify import verify_documents

log = logging.getLogger("dotsig.cli")

USAGE = """\
Usage: dotsig [-vhcDq] [-i id_file] [-P pub_key] [-a algo]
       [-p passphrase] [file ...]
e.g: dotsig path/to/document
e.g: echo 'Hello, World!' | dotsig
e.g: cat path/to/document | dotsig -c path/to/signature.sig

OPTIONS:
  file: Determines the document(s) to sign/verify.
  -p passphrase: Uses given passphrase to unlock the identity file.
  -a algo: Uses given DSA standard, supports: ecdsa, pkcs, openpgp,
           openpgp:rsa, openpgp:dsa, openpgp:ecdsa and openpgp:eddsa.
  -i id_file: Uses given identity file (e.g.: id_rsa).
  -P pub_key: Uses given public key file (e.g.: id_rsa.pub).

FLAGS:
  -v: Prints the dotsig version information.
  -h: Prints this help message and usage examples.
  -c: Enables the verification mode for digital signatures.
  -D: Enables the debug mode for the program.
  -q: Enables the quiet mode for the program.

COMMANDS:
  sign: Pass a document <file> to sign it using a DSA.
  verify: Use -c and pass a .sig <file> to verify a signature."""

app = typer.Typer(
    add_completion=False,
    help="Sign documents and verify .sig files",
    context_settings={"help_option_names": []},
)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"dotsig v{__version__}")
        raise typer.Exit()


def _print_usage(value: bool) -> None:
    if value:
        typer.echo(USAGE)
        raise typer.Exit()


def execute(
    options: RunOptions,
    stdin_data: bytes | None = None,
    prompt: Optional[Callable[[str], str]] = None,
) -> Iterator[str]:
    """Run one sign or verify batch and yield the report lines as they are produced."""
    require_input(options.files, stdin_data)

    passphrase = acquire_passphrase(options.passphrase, prompt)

    log.debug("Algorithm: %s", options.algo)
    log.debug("Mode: %s", options.mode)

    with create_identity(options.algo) as identity:
        provision_identity(identity, options.resolve_identity_file(), passphrase)

        documents = read_inputs(options.files, stdin_data)
        if not options.verify:
            for signed in sign_documents(identity, documents):
                yield f"Signature: {signed.signature_hex}"
        else:
            for checked in verify_documents(identity, documents):
                yield f"Verified {checked.name}: {checked.status}"


@app.command()
def main(
    files: Optional[List[str]] = typer.Argument(None, metavar="[file ...]", help="Document(s) to sign, or .sig file(s) to verify."),
    version: bool = typer.Option(False, "-v", callback=_print_version, is_eager=True, help="Print the version and exit."),
    usage: bool = typer.Option(False, "-h", callback=_print_usage, is_eager=True, help="Print usage and exit."),
    check: bool = typer.Option(False, "-c", help="Verification mode."),
    debug: bool = typer.Option(False, "-D", help="Enable diagnostic logging."),
    quiet: bool = typer.Option(False, "-q", help="Suppress diagnostics, even with -D."),
    identity_file: str = typer.Option("", "-i", metavar="id_file", help="Private identity file (signing)."),
    public_key: str = typer.Option("", "-P", metavar="pub_key", help="Public key file (verification)."),
    algo: str = typer.Option("", "-a", metavar="algo", help="Signature algorithm, defaults to ecdsa."),
    passphrase: str = typer.Option("", "-p", metavar="passphrase", help="Passphrase; empty or '-' prompts."),
) -> None:
    """Sign or verify documents."""
    configure_logging(debug, quiet)
    options = RunOptions.build(
        files,
        algo=algo,
        verify=check,
        identity_file=identity_file,
        public_key_file=public_key,
        passphrase=passphrase,
        debug=debug,
        quiet=quiet,
    )

    stdin_data = None
    if wants_stdin(options.files):
        stdin_data = typer.get_binary_stream("stdin").read()

    try:
        for line in execute(options, stdin_data):
            typer.echo(line)
    except UsageError as exc:
        typer.echo(f"dotsig: {exc}", err=True)
        typer.echo(USAGE)
        raise typer.Exit(code=1)
    except (DotsigError, OSError, ValueError) as exc:
        typer.echo(f"An error occurred: {exc}", err=True)
        raise typer.Exit(code=1)


def app_main():
    app()


if __name__ == "__main__":
    app_main()
