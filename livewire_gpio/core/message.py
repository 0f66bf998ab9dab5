"""Livewire GPIO message decoding.

A GPIO message is carried in a UDP payload laid out as::

    0   4  R/UDP constant 03 00 02 07
    4  12  R/UDP header remainder (ignored)
    16  4  message id (ASCII)
    20  2  item count
    22  6  item 1: tag, data type, value
    28  6  item 2, only in the 34 byte two-item indication

Item values are always one byte (27 and 33) whatever their data type code.

Each call decodes one packet and keeps no state between packets.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from livewire_gpio.core.circuits import address_for
from livewire_gpio.core.errors import TruncatedPacketError
from livewire_gpio.core.flags import decode_flags
from livewire_gpio.core.items import DEFAULT_TAGS, decode_item, read_bytes, read_uint
from livewire_gpio.core.model import (
    DecodedMessage,
    GpioAddress,
    MessageHeader,
    MessageKind,
    TagKind,
)
from livewire_gpio.core.names import NameResolver

RUDP_PREAMBLE = bytes.fromhex("03000207")
RUDP_HEADER_SIZE = 16
MESSAGE_ID_OFFSET = 16
ITEM_COUNT_OFFSET = 20
FIRST_ITEM_OFFSET = 22
SECOND_ITEM_OFFSET = 28
TWO_ITEM_LENGTH = 34
GPIO_VALUE_SIZE = 1
LOGGER = logging.getLogger(__name__)


def is_livewire_gpio(buffer: bytes) -> bool:
    """True when ``buffer`` starts with the R/UDP constant."""
    return buffer[: len(RUDP_PREAMBLE)] == RUDP_PREAMBLE


def _check_preamble(buffer: bytes) -> bool:
    length = len(buffer)
    if length == 0:
        return False
    if length < len(RUDP_PREAMBLE):
        if RUDP_PREAMBLE.startswith(buffer):
            raise TruncatedPacketError(offset=0, needed=len(RUDP_PREAMBLE), length=length)
        return False
    return is_livewire_gpio(buffer)


def decode_header(buffer: bytes) -> MessageHeader:
    code = read_bytes(buffer, MESSAGE_ID_OFFSET, 4)
    kind = MessageKind.from_code(code)
    if kind is MessageKind.UNKNOWN:
        LOGGER.debug("Unknown message id %r", code)
    return MessageHeader(
        preamble_valid=True,
        message_kind=kind,
        message_code=code,
        item_count=read_uint(buffer, ITEM_COUNT_OFFSET, 2),
    )


def _resolve_name(names: NameResolver | None, address: GpioAddress) -> str | None:
    key = address.lookup_key
    if names is None or key is None or address.direction is None:
        return None
    try:
        return names.lookup(key, address.direction)
    except Exception as exc:
        LOGGER.warning("Name lookup failed for %s: %s", address, exc)
        return None


def decode_message(
    buffer: bytes,
    *,
    names: NameResolver | None = None,
    tags: Mapping[int, TagKind] = DEFAULT_TAGS,
) -> DecodedMessage | None:
    """Decode one UDP payload.

    Returns None when the payload is not a Livewire GPIO message and raises
    TruncatedPacketError when it ends before a required field.
    """
    buffer = bytes(buffer)
    if not _check_preamble(buffer):
        LOGGER.debug("Not a Livewire GPIO payload (%d bytes)", len(buffer))
        return None

    header = decode_header(buffer)
    item, _ = decode_item(buffer, FIRST_ITEM_OFFSET, tags=tags, value_width=GPIO_VALUE_SIZE)

    second_item = None
    if len(buffer) == TWO_ITEM_LENGTH:
        second_item, _ = decode_item(
            buffer, SECOND_ITEM_OFFSET, tags=tags, value_width=GPIO_VALUE_SIZE
        )
    elif header.item_count > 1:
        LOGGER.debug(
            "Item count %d in a %d byte payload, decoding the first item only",
            header.item_count,
            len(buffer),
        )

    address = None
    flag_state = None
    local_name = None
    if item.tag.lcid is not None:
        address = address_for(item.tag.lcid)
        if not address.mapped:
            LOGGER.debug("Circuit %d does not map to a GPIO", address.circuit)
        flag_byte = item.flag_byte
        if flag_byte is not None:
            flag_state = decode_flags(flag_byte, header.message_kind)
        local_name = _resolve_name(names, address)

    return DecodedMessage(
        header=header,
        item=item,
        address=address,
        flag_state=flag_state,
        second_item=second_item,
        local_name=local_name,
    )
