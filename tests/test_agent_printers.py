from __future__ import annotations

import subprocess
import sys

import pytest

from relay_agent.errors import PrintError
from relay_agent.printers import linux
from relay_agent.printers.linux import CupsPrinterProvider


def test_print_raw_pipes_data_to_lp(monkeypatch) -> None:
    calls = []

    def fake_run(cmd, **kwargs):
        calls.append((cmd, kwargs))
        return subprocess.CompletedProcess(cmd, 0, stdout=b"request id is P1-7 (1 file(s))\n", stderr=b"")

    monkeypatch.setattr(linux.subprocess, "run", fake_run)
    out = CupsPrinterProvider(timeout=4).print_raw("P1", b"data", title="t")

    cmd, kwargs = calls[0]
    assert cmd[:3] == ["lp", "-d", "P1"]
    assert kwargs["input"] == b"data"
    assert kwargs["timeout"] == 4
    assert out.startswith("request id is P1-7")


def test_print_raw_timeout_becomes_print_error(monkeypatch) -> None:
    def fake_run(cmd, **kwargs):
        raise subprocess.TimeoutExpired(cmd, kwargs["timeout"])

    monkeypatch.setattr(linux.subprocess, "run", fake_run)
    with pytest.raises(PrintError, match="timed out"):
        CupsPrinterProvider(timeout=1).print_raw("P1", b"data")


def test_print_raw_nonzero_exit_becomes_print_error(monkeypatch) -> None:
    def fake_run(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, 1, stdout=b"", stderr=b"lp: The printer or class does not exist.")

    monkeypatch.setattr(linux.subprocess, "run", fake_run)
    with pytest.raises(PrintError, match="does not exist"):
        CupsPrinterProvider().print_raw("ghost", b"data")


def test_list_printers_parses_lpstat(monkeypatch) -> None:
    def fake_run(cmd, **kwargs):
        out = b"EPSON_TM_T20 accepting requests since Mon 19 Oct\nZebra_ZD421 accepting requests since Mon 19 Oct\n"
        return subprocess.CompletedProcess(cmd, 0, stdout=out, stderr=b"")

    monkeypatch.setattr(linux.subprocess, "run", fake_run)
    assert CupsPrinterProvider().list_printers() == ["EPSON_TM_T20", "Zebra_ZD421"]


@pytest.mark.skipif(sys.platform == "win32", reason="needs a POSIX sleep")
def test_real_timeout_kills_the_child(monkeypatch) -> None:
    # stands in for a hung lp
    original_run = subprocess.run

    def slow_run(cmd, **kwargs):
        return original_run(["sleep", "5"], **kwargs)

    monkeypatch.setattr(linux.subprocess, "run", slow_run)
    with pytest.raises(PrintError):
        CupsPrinterProvider(timeout=0.2).print_raw("P1", b"")


def test_get_provider_by_platform(monkeypatch) -> None:
    from relay_agent import printers

    monkeypatch.setattr(printers.platform, "system", lambda: "Linux")
    assert isinstance(printers.get_provider(), CupsPrinterProvider)

    monkeypatch.setattr(printers.platform, "system", lambda: "Plan9")
    with pytest.raises(RuntimeError):
        printers.get_provider()
