"""Tests for the application composition root and entry point."""

from pathlib import Path

import pytest

import prt7.line_source as line_source
from prt7.app import BANNER, DecoderApp
from prt7.config import DecoderConfig, SerialConfig
from prt7.line_source import LineSourceUnavailable, MockLineSource
from prt7.main import main

SAMPLE = Path(__file__).resolve().parent.parent / "samples" / "transmission.txt"


@pytest.fixture
def mock_config():
    return DecoderConfig(serial=SerialConfig(mock=True), banner=False)


@pytest.mark.asyncio
async def test_app_runs_session_over_mock_source(mock_config):
    trace = []
    source = MockLineSource(mock_config.serial, lines=["L,H", "L,I", "FIN"])
    app = DecoderApp(config=mock_config, line_source=source, sink=trace.append)

    await app.startup()
    assert source.is_connected()
    message = await app.run()
    await app.shutdown()

    assert message == "HI"
    assert not source.is_connected()
    assert trace[0] == "Starting PRT-7 decoder. Connecting to serial port..."
    assert trace[-1] == "Releasing resources... System shut down."


@pytest.mark.asyncio
async def test_app_prints_banner():
    trace = []
    cfg = DecoderConfig(serial=SerialConfig(mock=True), banner=True)
    app = DecoderApp(config=cfg, line_source=MockLineSource(cfg.serial, lines=[]), sink=trace.append)

    await app.startup()
    assert tuple(trace[: len(BANNER)]) == BANNER
    assert await app.run() == ""
    await app.shutdown()


@pytest.mark.asyncio
async def test_app_run_before_startup(mock_config):
    with pytest.raises(RuntimeError):
        await DecoderApp(config=mock_config).run()


@pytest.mark.asyncio
async def test_app_startup_without_serial_port(monkeypatch):
    def refuse(**kwargs):
        raise OSError("no such device")

    monkeypatch.setattr(line_source, "AioSerial", refuse)
    cfg = DecoderConfig(serial=SerialConfig(candidate_ports=("/dev/none",)), banner=False)
    app = DecoderApp(config=cfg, sink=lambda _: None)

    with pytest.raises(LineSourceUnavailable):
        await app.startup()
    await app.shutdown()


def test_main_replays_sample_file(capsys, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main(["--replay", str(SAMPLE)]) == 0

    out = capsys.readouterr().out.splitlines()
    assert "Control message received: [SISTEMA PRT-7 ACTIVO]" in out
    report = out.index("ASSEMBLED HIDDEN MESSAGE:")
    assert out[report + 1] == "HOLA MUNDO"


def test_main_exits_nonzero_without_serial_port(capsys, tmp_path, monkeypatch):
    def refuse(**kwargs):
        raise OSError("no such device")

    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(line_source, "AioSerial", refuse)
    monkeypatch.setattr(line_source.list_ports, "comports", lambda: [])

    assert main([]) == 1
    err = capsys.readouterr().err
    assert "ERROR: Could not connect to any serial port." in err


def test_main_rejects_missing_config(capsys, tmp_path):
    assert main(["--config", str(tmp_path / "missing.toml")]) == 1
    assert "Invalid configuration" in capsys.readouterr().err


def test_main_rejects_unknown_log_level(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--log-level", "bogus"])
    assert exc.value.code == 2
    assert "invalid choice" in capsys.readouterr().err


def test_main_accepts_lowercase_log_level(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main(["--log-level", "debug", "--replay", str(SAMPLE)]) == 0
