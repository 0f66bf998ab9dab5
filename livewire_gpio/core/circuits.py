"""Circuit-to-GPIO mapping for LCID tags."""

from __future__ import annotations

from types import MappingProxyType

from livewire_gpio.core.model import GpioAddress, GpioDirection, LcidTag

# GPO circuits 4-8 and GPI circuits 9-13 both count down to GPIO 1.
CIRCUIT_TO_GPIO = MappingProxyType(
    {
        **{circuit: (9 - circuit, GpioDirection.GPO) for circuit in range(4, 9)},
        **{circuit: (14 - circuit, GpioDirection.GPI) for circuit in range(9, 14)},
    }
)


def map_circuit(circuit: int) -> tuple[int, GpioDirection] | None:
    return CIRCUIT_TO_GPIO.get(circuit)


def address_for(lcid: LcidTag) -> GpioAddress:
    mapped = map_circuit(lcid.circuit)
    if mapped is None:
        return GpioAddress(
            logic_port_id=lcid.logic_port_id,
            circuit=lcid.circuit,
            gpio_number=None,
            direction=None,
        )
    gpio_number, direction = mapped
    return GpioAddress(
        logic_port_id=lcid.logic_port_id,
        circuit=lcid.circuit,
        gpio_number=gpio_number,
        direction=direction,
    )
