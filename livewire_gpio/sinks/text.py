"""One-line text summaries of decoded results."""

from __future__ import annotations

from collections.abc import Callable

from livewire_gpio.core.flags import describe_flags
from livewire_gpio.core.model import (
    ChannelInfo,
    DecodedMessage,
    Item,
    MessageClass,
    MessageKind,
    TagKind,
)

_MESSAGE_CLASS_LABELS = {
    MessageClass.COMMAND: "Command",
    MessageClass.RESPONSE: "Response",
}


def describe_item(item: Item) -> str:
    kind = item.tag.kind
    if kind is TagKind.GAIN:
        gain_db = item.gain_db
        if gain_db is None:
            return "Gain ? dB"
        return f"Gain {gain_db:+.1f} dB"
    if kind is TagKind.MUTE:
        muted = item.muted
        if muted is None:
            return "Mute ?"
        return "Mute on" if muted else "Mute off"
    if kind is TagKind.MESSAGE_CLASS:
        message_class = item.message_class
        if message_class is None:
            return f"Message class {item.value}"
        return _MESSAGE_CLASS_LABELS[message_class]
    return f"Tag 0x{item.tag.raw:08X} = {item.value_bytes.hex()}"


def summarize_message(message: DecodedMessage) -> str:
    kind = message.header.message_kind
    if message.address is None:
        line = f"{kind.label} {describe_item(message.item)}"
    else:
        line = f"{kind.label} {message.address}"
        if kind is not MessageKind.READ:
            line += f" = {message.item.flag_byte}"

        state = ""
        if message.flag_state is not None:
            state = describe_flags(message.flag_state, kind)
        if message.local_name is not None:
            detail = message.local_name
            if state:
                detail = f"{detail} = {state}"
        else:
            detail = state
        if detail:
            line += f" [{detail}]"

    if message.second_item is not None:
        line += f", {describe_item(message.second_item)}"
    return line


def summarize_channel(info: ChannelInfo) -> str:
    return f"Livewire {info.packet_profile.label}, Channel={info.channel_number}"


def summarize(result: DecodedMessage | ChannelInfo) -> str:
    if isinstance(result, ChannelInfo):
        return summarize_channel(result)
    return summarize_message(result)


class TextReportSink:
    def __init__(self, write: Callable[[str], None] = print) -> None:
        self._write = write

    def emit(self, result: DecodedMessage | ChannelInfo) -> None:
        self._write(summarize(result))
