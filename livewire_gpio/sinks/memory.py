"""In-memory report sink."""

from __future__ import annotations

from livewire_gpio.core.model import ChannelInfo, DecodedMessage


class MemorySink:
    def __init__(self) -> None:
        self.results: list[DecodedMessage | ChannelInfo] = []

    def emit(self, result: DecodedMessage | ChannelInfo) -> None:
        self.results.append(result)
