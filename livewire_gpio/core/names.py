"""Local GPIO name table.

The table maps ``lpid * 10 + gpio`` to a site-specific label, separately
for GPOs and GPIs. For Livewire channel 18204, GPO 5 is key 182045::

    gpo:
      182044: St1 Console CP4 Fader Open
      182045: St1 Console CP4 Start
    gpi:
      182045: srvdira1001 St1 CP4 Ready
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Protocol

from livewire_gpio.core.errors import NameTableLoadError, NameTableValidationError
from livewire_gpio.core.files import config_dir, read_yaml, validate
from livewire_gpio.core.model import GpioDirection

NAMES_FILE = "local_names.yaml"
LOGGER = logging.getLogger(__name__)


class NameResolver(Protocol):
    def lookup(self, key: int, direction: GpioDirection) -> str | None:
        """Return the local label for a GPIO, or None when there is none."""


def _empty() -> Mapping[int, str]:
    return MappingProxyType({})


@dataclass(frozen=True)
class NameTable:
    gpo: Mapping[int, str] = field(default_factory=_empty)
    gpi: Mapping[int, str] = field(default_factory=_empty)
    source: Path | None = None

    def lookup(self, key: int, direction: GpioDirection) -> str | None:
        table = self.gpi if direction is GpioDirection.GPI else self.gpo
        return table.get(key)

    def __len__(self) -> int:
        return len(self.gpo) + len(self.gpi)


def _normalize_key(key: Any, *, context: str) -> int | None:
    text = str(key).strip()
    if not text.isdigit():
        raise NameTableValidationError(f"{context}: key '{key}' must be a non-negative integer")
    value = int(text)
    if not 1 <= value % 10 <= 5:
        LOGGER.warning("%s: key %d does not address GPIO 1-5, ignoring", context, value)
        return None
    return value


def _build_table(doc: dict[str, Any], source: Path) -> NameTable:
    validate(doc, "local_names.schema.json", source, validation_error=NameTableValidationError)

    tables: dict[str, Mapping[int, str]] = {}
    for section in ("gpo", "gpi"):
        entries: dict[int, str] = {}
        for key, label in (doc.get(section) or {}).items():
            normalized = _normalize_key(key, context=f"{source} {section}")
            if normalized is None:
                continue
            if normalized in entries:
                raise NameTableValidationError(
                    f"{source} {section}: key {normalized} is defined more than once"
                )
            entries[normalized] = label or ""
        tables[section] = MappingProxyType(entries)

    return NameTable(gpo=tables["gpo"], gpi=tables["gpi"], source=source)


def load_names(path: Path | None = None) -> NameTable:
    """Load the name table from ``path`` or the user config directory.

    Without an explicit path a missing file simply means no local labels.
    """
    if path is None:
        path = config_dir() / NAMES_FILE
        if not path.is_file():
            LOGGER.debug("No name table at %s", path)
            return NameTable()
    elif not path.is_file():
        raise NameTableLoadError(f"Name table {path} does not exist")

    doc = read_yaml(path, load_error=NameTableLoadError, validation_error=NameTableValidationError)
    table = _build_table(doc, path)
    LOGGER.debug("Loaded %d local names from %s", len(table), path)
    return table
