from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from livewire_gpio import cli

runner = CliRunner()


def test_decode_command(config_home: Path, make_packet) -> None:
    result = runner.invoke(cli.app, ["decode", make_packet(b"WRNI", value=65).hex()])
    assert result.exit_code == 0
    assert "Write GPO 100.4 = 65 [Pulse High - 0.25 seconds]" in result.output


def test_decode_command_with_names(config_home: Path, tmp_path: Path, write_file, make_packet) -> None:
    names = write_file(tmp_path / "names.yaml", "gpo:\n  1004: Studio Start\n")
    result = runner.invoke(cli.app, ["decode", "--names", str(names), make_packet(b"READ").hex()])
    assert result.exit_code == 0
    assert "Read GPO 100.4 [Studio Start]" in result.output


def test_decode_command_reads_payload_file(config_home: Path, tmp_path: Path, write_file, make_packet) -> None:
    payloads = write_file(
        tmp_path / "payloads.txt",
        f"# capture\n{make_packet(b'INDI', value=0).hex()}\n\n{'00' * 28}\n",
    )
    result = runner.invoke(cli.app, ["decode", "--file", str(payloads)])
    assert result.exit_code == 0
    assert "Indicate GPO 100.4 = 0 [Inactive]" in result.output
    assert "Packet 1: not a Livewire GPIO payload" in result.output


def test_decode_command_reports_bad_packet_and_continues(config_home: Path, make_packet) -> None:
    result = runner.invoke(cli.app, ["decode", make_packet()[:24].hex(), make_packet().hex()])
    assert result.exit_code == 1
    assert "Packet 0: Error: Packet truncated" in result.output
    assert "Write GPO 100.4 = 64 [High]" in result.output
    assert "Traceback" not in result.output


def test_decode_command_without_payloads(config_home: Path) -> None:
    result = runner.invoke(cli.app, ["decode"])
    assert result.exit_code == 1
    assert "No payloads given" in result.output


def test_invalid_names_file_is_a_clean_error(config_home: Path, tmp_path: Path, write_file, make_packet) -> None:
    names = write_file(tmp_path / "names.yaml", "gpo: [1, 2]\n")
    result = runner.invoke(cli.app, ["decode", "--names", str(names), make_packet().hex()])
    assert result.exit_code == 1
    assert "Error: Schema validation failed" in result.output
    assert "Traceback" not in result.output


def test_classify_command(config_home: Path) -> None:
    result = runner.invoke(cli.app, ["classify", "239.192.71.28", "308"])
    assert result.exit_code == 0
    assert "Livewire AES67 (48 samples, 1 ms), Channel=18204" in result.output


def test_classify_command_other_port(config_home: Path) -> None:
    result = runner.invoke(cli.app, ["classify", "239.192.71.28", "308", "--port", "5005"])
    assert result.exit_code == 0
    assert "Not a Livewire audio stream" in result.output


def test_classify_command_rejects_bad_address(config_home: Path) -> None:
    result = runner.invoke(cli.app, ["classify", "not-an-ip", "308"])
    assert result.exit_code != 0


def test_names_command(config_home: Path, write_file) -> None:
    write_file(config_home / "local_names.yaml", "gpo:\n  182045: Start\ngpi:\n  182041: Ready\n")
    result = runner.invoke(cli.app, ["names"])
    assert result.exit_code == 0
    assert "GPO 18204.5: Start" in result.output
    assert "GPI 18204.1: Ready" in result.output


def test_names_command_empty(config_home: Path) -> None:
    result = runner.invoke(cli.app, ["names"])
    assert result.exit_code == 0
    assert "No local names loaded" in result.output


def test_stream_address_command() -> None:
    result = runner.invoke(cli.app, ["stream-address", "18204"])
    assert result.exit_code == 0
    assert "LPID 18204 -> 239.192.71.28" in result.output


def test_settings_error_is_clean(config_home: Path, write_file) -> None:
    write_file(config_home / "config.yaml", "stream_port: nope\n")
    result = runner.invoke(cli.app, ["classify", "239.192.71.28", "308"])
    assert result.exit_code == 1
    assert "Error: Schema validation failed" in result.output
