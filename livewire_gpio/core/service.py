"""Service layer used by the CLI and the public API."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from ipaddress import IPv4Address

from livewire_gpio.core.errors import LivewireError, PayloadFormatError
from livewire_gpio.core.message import decode_message
from livewire_gpio.core.model import ChannelInfo, DecodedMessage
from livewire_gpio.core.names import NameResolver, load_names
from livewire_gpio.core.settings import Settings, load_settings
from livewire_gpio.core.streams import classify_stream
from livewire_gpio.sinks.base import ReportSink

_SEPARATOR_RE = re.compile(r"[\s:.-]+")
_HEX_RE = re.compile(r"^[0-9a-f]*$")
LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class PacketReport:
    index: int
    message: DecodedMessage | None
    error: str | None = None

    @property
    def applicable(self) -> bool:
        return self.message is not None


def parse_hex_payload(text: str) -> bytes:
    normalized = _SEPARATOR_RE.sub("", text.strip().lower())
    if normalized.startswith("0x"):
        normalized = normalized[2:]
    if len(normalized) % 2 != 0:
        raise PayloadFormatError(f"Payload '{text}' must have even-length hex")
    if not _HEX_RE.match(normalized):
        raise PayloadFormatError(f"Payload '{text}' must contain only [0-9a-f]")
    return bytes.fromhex(normalized)


class LivewireService:
    """Decoding entry point holding the settings and name table.

    Settings and names are loaded once here; decoding never touches the
    filesystem and never mutates either.
    """

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        names: NameResolver | None = None,
        sink: ReportSink | None = None,
    ) -> None:
        self.settings = settings or load_settings()
        if names is None:
            names = load_names(self.settings.names_file)
        self.names = names
        self.sink = sink

    def decode(self, payload: bytes) -> DecodedMessage | None:
        message = decode_message(payload, names=self.names, tags=self.settings.tags)
        if message is not None:
            self.report(message)
        return message

    def decode_hex(self, text: str) -> DecodedMessage | None:
        return self.decode(parse_hex_payload(text))

    def decode_many(self, payloads: Iterable[bytes | str]) -> list[PacketReport]:
        reports: list[PacketReport] = []
        for index, payload in enumerate(payloads):
            try:
                if isinstance(payload, str):
                    message = self.decode_hex(payload)
                else:
                    message = self.decode(payload)
            except LivewireError as exc:
                LOGGER.debug("Packet %d failed to decode: %s", index, exc)
                reports.append(PacketReport(index=index, message=None, error=str(exc)))
                continue
            reports.append(PacketReport(index=index, message=message))
        return reports

    def classify(self, dest_ip: str | IPv4Address, dest_port: int, udp_length: int) -> ChannelInfo | None:
        info = classify_stream(
            dest_ip,
            dest_port,
            udp_length,
            stream_port=self.settings.stream_port,
        )
        if info is not None:
            self.report(info)
        return info

    def is_gpio_port(self, port: int) -> bool:
        return port in self.settings.gpio_ports

    def report(self, result: DecodedMessage | ChannelInfo) -> None:
        if self.sink is not None:
            self.sink.emit(result)
