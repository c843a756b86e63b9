from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from dotsig import __version__
from dotsig.errors import UsageError
from dotsig_cli import main as cli_main
from dotsig_cli.runners.common import RunOptions, acquire_passphrase

DOCUMENT = b"Quarterly report\nrevenue: 42\n"


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, dotsig_home: Path) -> Path:
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    (work / "report.txt").write_bytes(DOCUMENT)
    return work


def _signature_lines(output: str) -> list[str]:
    return [line for line in output.splitlines() if line.startswith("Signature: ")]


def test_version_and_usage(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli_main.app, ["-v"])
    assert result.exit_code == 0
    assert result.output.strip() == f"dotsig v{__version__}"

    result = cli_runner.invoke(cli_main.app, ["-h"])
    assert result.exit_code == 0
    assert "Usage: dotsig [-vhcDq]" in result.output


def test_no_input_is_a_usage_error(cli_runner: CliRunner, workdir: Path, dotsig_home: Path) -> None:
    result = cli_runner.invoke(cli_main.app, ["-p", "s3cret"], input="")
    assert result.exit_code == 1
    assert "Usage: dotsig" in result.output
    # aborted before any key work
    assert not (dotsig_home / "id_ecdsa").exists()


def test_sign_creates_default_identity(cli_runner: CliRunner, workdir: Path, dotsig_home: Path) -> None:
    result = cli_runner.invoke(cli_main.app, ["-p", "s3cret", "report.txt"])
    assert result.exit_code == 0, result.output

    assert (dotsig_home / "id_ecdsa").exists()
    assert (dotsig_home / "id_ecdsa.pub").exists()
    signature = (workdir / "report.txt.sig").read_bytes()
    assert _signature_lines(result.stdout) == [f"Signature: {signature.hex().upper()}"]

    result = cli_runner.invoke(cli_main.app, ["-c", "-p", "s3cret", "report.txt", "report.txt.sig"])
    assert result.exit_code == 0, result.output
    assert "Verified report.txt.sig: OK" in result.stdout


def test_sign_reuses_existing_identity(cli_runner: CliRunner, workdir: Path, dotsig_home: Path) -> None:
    cli_runner.invoke(cli_main.app, ["-p", "s3cret", "report.txt"])
    key_bytes = (dotsig_home / "id_ecdsa").read_bytes()
    (workdir / "report.txt.sig").unlink()

    result = cli_runner.invoke(cli_main.app, ["-p", "s3cret", "report.txt"])
    assert result.exit_code == 0, result.output
    assert (dotsig_home / "id_ecdsa").read_bytes() == key_bytes

    result = cli_runner.invoke(cli_main.app, ["-p", "wrong", "report.txt"])
    assert result.exit_code == 1
    assert "An error occurred: Loading identity file failed" in result.output


def test_verify_reports_not_ok_for_tampered_document(cli_runner: CliRunner, workdir: Path) -> None:
    cli_runner.invoke(cli_main.app, ["-p", "s3cret", "report.txt"])
    (workdir / "report.txt").write_bytes(DOCUMENT + b"forged\n")

    result = cli_runner.invoke(cli_main.app, ["-cq", "-p", "s3cret", "report.txt", "report.txt.sig"])
    assert result.exit_code == 0, result.output
    assert "Verified report.txt.sig: NOT OK" in result.stdout


def test_verify_falls_back_to_stdin(cli_runner: CliRunner, workdir: Path) -> None:
    (workdir / "a").write_bytes(DOCUMENT)
    cli_runner.invoke(cli_main.app, ["-p", "s3cret", "a"])
    (workdir / "a").unlink()

    result = cli_runner.invoke(cli_main.app, ["-c", "-p", "s3cret", "a.sig"], input=DOCUMENT)
    assert result.exit_code == 0, result.output
    assert "Verified a.sig: OK" in result.stdout


def test_missing_document_after_earlier_results(cli_runner: CliRunner, workdir: Path) -> None:
    cli_runner.invoke(cli_main.app, ["-p", "s3cret", "report.txt"])
    (workdir / "b.sig").write_bytes(b"\x00" * 64)

    result = cli_runner.invoke(
        cli_main.app, ["-c", "-p", "s3cret", "report.txt", "report.txt.sig", "b.sig"]
    )
    assert result.exit_code == 1
    assert "Verified report.txt.sig: OK" in result.output
    assert "Missing document to verify signature: b.sig" in result.output


def test_sign_from_stdin(cli_runner: CliRunner, workdir: Path) -> None:
    result = cli_runner.invoke(cli_main.app, ["-p", "s3cret"], input=DOCUMENT)
    assert result.exit_code == 0, result.output
    assert len(_signature_lines(result.stdout)) == 1
    assert (workdir / "stdin.sig").exists()


def test_sign_every_input(cli_runner: CliRunner, workdir: Path) -> None:
    (workdir / "notes.md").write_bytes(b"# notes\n")
    result = cli_runner.invoke(cli_main.app, ["-p", "s3cret", "report.txt", "notes.md"])
    assert result.exit_code == 0, result.output
    assert len(_signature_lines(result.stdout)) == 2
    assert (workdir / "report.txt.sig").exists()
    assert (workdir / "notes.md.sig").exists()


def test_missing_input_file(cli_runner: CliRunner, workdir: Path) -> None:
    result = cli_runner.invoke(cli_main.app, ["-p", "s3cret", "report.txt", "nope.txt"])
    assert result.exit_code == 1
    assert "Provided document does not exist: nope.txt" in result.output
    assert not (workdir / "report.txt.sig").exists()


def test_algorithm_is_case_insensitive_with_fallback(cli_runner: CliRunner, workdir: Path, dotsig_home: Path) -> None:
    result = cli_runner.invoke(cli_main.app, ["-a", "OpenPGP:EdDSA", "-p", "s3cret", "report.txt"])
    assert result.exit_code == 0, result.output
    assert (dotsig_home / "id_openpgp_eddsa").exists()

    result = cli_runner.invoke(cli_main.app, ["-a", "bogus", "-p", "s3cret", "report.txt"])
    assert result.exit_code == 0, result.output
    assert (dotsig_home / "id_ecdsa").exists()


def test_explicit_identity_paths(cli_runner: CliRunner, workdir: Path, dotsig_home: Path) -> None:
    result = cli_runner.invoke(cli_main.app, ["-a", "pkcs", "-i", "mykey", "-p", "s3cret", "report.txt"])
    assert result.exit_code == 0, result.output
    assert (workdir / "mykey").exists()
    assert (workdir / "mykey.pub").exists()
    assert not (dotsig_home / "id_rsa").exists()

    result = cli_runner.invoke(
        cli_main.app, ["-c", "-a", "pkcs", "-P", "mykey.pub", "-p", "s3cret", "report.txt", "report.txt.sig"],
    )
    assert result.exit_code == 0, result.output
    assert "Verified report.txt.sig: OK" in result.stdout
    assert not (dotsig_home / "id_rsa.pub").exists()


def test_execute_prompts_for_passphrase(workdir: Path, dotsig_home: Path) -> None:
    prompts: list[str] = []

    def fake_prompt(text: str) -> str:
        prompts.append(text)
        return "typed"

    options = RunOptions.build(["report.txt"], algo="", passphrase="-")
    lines = list(cli_main.execute(options, None, prompt=fake_prompt))

    assert prompts == ["Enter your password: "]
    assert len(lines) == 1 and lines[0].startswith("Signature: ")
    assert options.algo == "ecdsa"
    assert options.mode == "Signature"


def test_empty_passphrase_is_refused_before_key_work(workdir: Path, dotsig_home: Path) -> None:
    options = RunOptions.build(["report.txt"], passphrase="-")
    with pytest.raises(UsageError, match="non-empty passphrase"):
        list(cli_main.execute(options, None, prompt=lambda _: ""))

    assert not (dotsig_home / "id_ecdsa").exists()
    assert not (workdir / "report.txt.sig").exists()


def test_execute_requires_input() -> None:
    options = RunOptions.build([], passphrase="s3cret")
    with pytest.raises(UsageError):
        list(cli_main.execute(options, b""))


def test_acquire_passphrase() -> None:
    assert acquire_passphrase("given", prompt=lambda _: "typed") == "given"
    assert acquire_passphrase("", prompt=lambda _: "typed") == "typed"
    assert acquire_passphrase("-", prompt=lambda _: "typed") == "typed"
    with pytest.raises(UsageError):
        acquire_passphrase("", prompt=lambda _: "")


def test_run_options_are_immutable() -> None:
    options = RunOptions.build(["a"], algo="PKCS", verify=True)
    assert options.algo == "pkcs"
    assert options.files == ("a",)
    with pytest.raises(AttributeError):
        options.verify = False  # type: ignore[misc]
