"""Item decoding: tag, data type, optional length and value."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

from livewire_gpio.core.errors import TruncatedPacketError
from livewire_gpio.core.model import DataType, Item, ItemTag, LcidTag, TagKind

MESSAGE_CLASS_TAG = 0xFFFFFFFD
TAG_SIZE = 4
LENGTH_FIELD_SIZE = 2
LOGGER = logging.getLogger(__name__)

# Gain and mute tag values are deployment specific and come from settings.
DEFAULT_TAGS: Mapping[int, TagKind] = MappingProxyType({MESSAGE_CLASS_TAG: TagKind.MESSAGE_CLASS})


def read_bytes(buffer: bytes, offset: int, size: int) -> bytes:
    if offset < 0 or offset + size > len(buffer):
        raise TruncatedPacketError(offset=offset, needed=size, length=len(buffer))
    return buffer[offset : offset + size]


def read_uint(buffer: bytes, offset: int, size: int) -> int:
    return int.from_bytes(read_bytes(buffer, offset, size), "big")


def decode_tag(raw: int, tags: Mapping[int, TagKind] = DEFAULT_TAGS) -> ItemTag:
    kind = tags.get(raw)
    if kind is not None:
        return ItemTag(raw=raw, kind=kind)
    if raw >> 24 == 0:
        lcid = LcidTag(logic_port_id=(raw >> 8) & 0xFFFF, circuit=raw & 0xFF)
        return ItemTag(raw=raw, kind=TagKind.LCID, lcid=lcid)
    return ItemTag(raw=raw, kind=TagKind.RAW)


def decode_item(
    buffer: bytes,
    offset: int,
    *,
    tags: Mapping[int, TagKind] = DEFAULT_TAGS,
    value_width: int | None = None,
) -> tuple[Item, int]:
    """Decode the item starting at ``offset``.

    Returns the item and the number of bytes it occupies. Fixed-width data
    types carry no length field; variable types are preceded by a two byte
    length. Unknown data type codes take a single value byte.

    ``value_width`` pins the value to that many bytes straight after the
    data type, whatever the type code says. GPIO messages use a width of 1.
    """
    tag = decode_tag(read_uint(buffer, offset, TAG_SIZE), tags)
    cursor = offset + TAG_SIZE

    data_type_code = read_uint(buffer, cursor, 1)
    data_type = DataType.from_code(data_type_code)
    cursor += 1
    if data_type is DataType.UNKNOWN:
        LOGGER.debug("Unknown data type code %d at offset %d", data_type_code, cursor - 1)

    length: int | None = None
    width = value_width if value_width is not None else data_type.fixed_width
    if width is None and data_type is not DataType.UNKNOWN:
        length = read_uint(buffer, cursor, LENGTH_FIELD_SIZE)
        cursor += LENGTH_FIELD_SIZE
        width = length
    elif width is None:
        width = 1

    value_bytes = read_bytes(buffer, cursor, width)
    cursor += width
    size = cursor - offset
    item = Item(
        tag=tag,
        data_type=data_type,
        data_type_code=data_type_code,
        value_bytes=value_bytes,
        offset=offset,
        size=size,
        length=length,
    )
    return item, size
