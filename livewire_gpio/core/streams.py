"""Livewire audio stream classification from IP/UDP header fields."""

from __future__ import annotations

import logging
from ipaddress import IPv4Address

from livewire_gpio.core.model import ChannelInfo, PacketProfile

LIVEWIRE_STREAM_PORT = 5004
LIVEWIRE_MULTICAST_PREFIX = 239
LIVEWIRE_MULTICAST_SECOND_OCTETS = frozenset({192, 193})
LOGGER = logging.getLogger(__name__)


def is_livewire_multicast(address: IPv4Address) -> bool:
    first, second, _, _ = address.packed
    return first == LIVEWIRE_MULTICAST_PREFIX and second in LIVEWIRE_MULTICAST_SECOND_OCTETS


def classify_stream(
    dest_ip: str | IPv4Address,
    dest_port: int,
    udp_length: int,
    *,
    stream_port: int = LIVEWIRE_STREAM_PORT,
) -> ChannelInfo | None:
    """Identify a Livewire audio packet and its channel.

    ``udp_length`` is the UDP length field as captured; the packet profile
    is recognised by exact match only.
    """
    address = IPv4Address(dest_ip)
    if dest_port != stream_port or not is_livewire_multicast(address):
        return None

    profile = PacketProfile.from_length(udp_length)
    if profile is PacketProfile.UNKNOWN:
        LOGGER.debug("Livewire stream to %s with unrecognised length %d", address, udp_length)
    return ChannelInfo(
        destination=address,
        channel_number=int(address) % 65536,
        packet_profile=profile,
        udp_length=udp_length,
    )


def stream_address_for_lpid(logic_port_id: int) -> IPv4Address:
    """Multicast address of the audio stream sharing a logic port's channel number."""
    if not 0 <= logic_port_id <= 0xFFFF:
        raise ValueError(f"Logic port id out of range: {logic_port_id}")
    return IPv4Address(f"239.192.{logic_port_id // 256}.{logic_port_id % 256}")
