"""Typer CLI entrypoint."""

from __future__ import annotations

import logging
from pathlib import Path

import typer

from livewire_gpio.core.errors import LivewireError
from livewire_gpio.core.names import load_names
from livewire_gpio.core.service import LivewireService
from livewire_gpio.core.settings import load_settings
from livewire_gpio.core.streams import stream_address_for_lpid
from livewire_gpio.sinks.text import TextReportSink

app = typer.Typer(help="Decode Livewire GPIO messages and classify Livewire audio streams")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )


def _build_service(config: Path | None, names: Path | None) -> LivewireService:
    settings = load_settings(config)
    name_table = load_names(names or settings.names_file)
    return LivewireService(settings=settings, names=name_table, sink=TextReportSink(typer.echo))


def _read_payload_file(path: Path) -> list[str]:
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        raise LivewireError(f"Could not read payload file {path}: {exc}") from exc
    return [line.strip() for line in lines if line.strip() and not line.lstrip().startswith("#")]


@app.command("decode")
def decode(
    payloads: list[str] | None = typer.Argument(None, help="UDP payloads as hex"),
    file: Path | None = typer.Option(None, "--file", help="File with one hex payload per line"),
    names: Path | None = typer.Option(None, "--names", help="Local name table (YAML)"),
    config: Path | None = typer.Option(None, "--config", help="Settings file (YAML)"),
) -> None:
    """Decode Livewire GPIO UDP payloads."""
    try:
        service = _build_service(config, names)
        items = list(payloads or [])
        if file is not None:
            items.extend(_read_payload_file(file))
        if not items:
            typer.echo("No payloads given", err=True)
            raise typer.Exit(code=1)

        failed = False
        for report in service.decode_many(items):
            if report.error is not None:
                failed = True
                typer.echo(f"Packet {report.index}: Error: {report.error}", err=True)
            elif report.message is None:
                typer.echo(f"Packet {report.index}: not a Livewire GPIO payload")
        if failed:
            raise typer.Exit(code=1)
    except LivewireError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("classify")
def classify(
    dest_ip: str,
    udp_length: int,
    port: int | None = typer.Option(None, "--port", help="UDP destination port (default: stream port)"),
    config: Path | None = typer.Option(None, "--config", help="Settings file (YAML)"),
) -> None:
    """Classify a packet by destination address, port and UDP length."""
    try:
        service = _build_service(config, None)
        dest_port = port if port is not None else service.settings.stream_port
        try:
            info = service.classify(dest_ip, dest_port, udp_length)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="DEST_IP") from exc
        if info is None:
            typer.echo("Not a Livewire audio stream")
    except LivewireError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("names")
def list_names(
    names: Path | None = typer.Option(None, "--names", help="Local name table (YAML)"),
    config: Path | None = typer.Option(None, "--config", help="Settings file (YAML)"),
) -> None:
    """List the loaded local GPIO names."""
    try:
        settings = load_settings(config)
        table = load_names(names or settings.names_file)
        if len(table) == 0:
            typer.echo("No local names loaded")
            return
        for section, entries in (("GPO", table.gpo), ("GPI", table.gpi)):
            for key, label in sorted(entries.items()):
                typer.echo(f"{section} {key // 10}.{key % 10}: {label}")
    except LivewireError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("stream-address")
def stream_address(lpid: int) -> None:
    """Show the audio multicast address sharing a logic port's channel."""
    try:
        address = stream_address_for_lpid(lpid)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="LPID") from exc
    typer.echo(f"LPID {lpid} -> {address}")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
