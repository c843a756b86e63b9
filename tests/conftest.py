from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]

for candidate in (
    ROOT / "libs" / "core" / "src",
    ROOT / "libs" / "adapters" / "ecdsa" / "src",
    ROOT / "libs" / "adapters" / "rsa" / "src",
    ROOT / "libs" / "adapters" / "openpgp" / "src",
    ROOT / "apps" / "cli" / "src",
):
    candidate_str = str(candidate)
    if candidate_str not in sys.path:
        sys.path.insert(0, candidate_str)

from dotsig_cli.runners.common import _load_adapters  # noqa: E402

_load_adapters()


@pytest.fixture(autouse=True)
def small_keys(monkeypatch: pytest.MonkeyPatch) -> None:
    # Smallest sizes the provider accepts keep key generation fast.
    monkeypatch.setenv("DOTSIG_RSA_BITS", "1024")
    monkeypatch.setenv("DOTSIG_DSA_BITS", "1024")


@pytest.fixture
def dotsig_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "home" / ".dotsig"
    monkeypatch.setenv("DOTSIG_HOME", str(home))
    return home
