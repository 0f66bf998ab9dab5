from __future__ import annotations

from pathlib import Path

import pytest

RUDP = bytes.fromhex("03000207") + bytes(12)


def gpio_packet(
    message_id: bytes = b"WRNI",
    *,
    lpid: int = 100,
    circuit: int = 5,
    value: int = 0x40,
    data_type: int = 7,
    item_count: int = 1,
    trailer: bytes = b"",
) -> bytes:
    return (
        RUDP
        + message_id
        + item_count.to_bytes(2, "big")
        + b"\x00"
        + lpid.to_bytes(2, "big")
        + bytes([circuit, data_type, value])
        + trailer
    )


@pytest.fixture
def make_packet():
    return gpio_packet


@pytest.fixture
def config_home(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
    return tmp_path / "cfg" / "livewire-gpio"


def _write_file(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def write_file():
    return _write_file
