"""Settings loading for livewire-gpio."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from livewire_gpio.core.errors import ConfigLoadError, ConfigValidationError
from livewire_gpio.core.files import config_dir, read_yaml, validate
from livewire_gpio.core.items import DEFAULT_TAGS
from livewire_gpio.core.model import TagKind

CONFIG_FILE = "config.yaml"
DEFAULT_GPIO_PORTS = (2055, 2060)
DEFAULT_STREAM_PORT = 5004
LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    gpio_ports: tuple[int, ...] = DEFAULT_GPIO_PORTS
    stream_port: int = DEFAULT_STREAM_PORT
    names_file: Path | None = None
    tags: Mapping[int, TagKind] = field(default_factory=lambda: DEFAULT_TAGS)


def _parse_tag(value: Any, *, context: str) -> int:
    if isinstance(value, int):
        return value
    try:
        return int(value, 16)
    except ValueError as exc:
        raise ConfigValidationError(f"{context} must be a 32-bit tag value") from exc


def _build_settings(doc: dict[str, Any], source: Path) -> Settings:
    validate(doc, "config.schema.json", source, validation_error=ConfigValidationError)

    tags = dict(DEFAULT_TAGS)
    for name, kind in (("gain", TagKind.GAIN), ("mute", TagKind.MUTE)):
        if name not in doc.get("tags", {}):
            continue
        raw = _parse_tag(doc["tags"][name], context=f"tags.{name}")
        if raw in tags:
            raise ConfigValidationError(
                f"tags.{name} 0x{raw:08X} collides with the {tags[raw].value} tag"
            )
        tags[raw] = kind

    names_file = None
    if "names_file" in doc:
        names_file = Path(doc["names_file"]).expanduser()
        if not names_file.is_absolute():
            names_file = source.parent / names_file

    return Settings(
        gpio_ports=tuple(doc.get("gpio_ports", DEFAULT_GPIO_PORTS)),
        stream_port=int(doc.get("stream_port", DEFAULT_STREAM_PORT)),
        names_file=names_file,
        tags=MappingProxyType(tags),
    )


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from ``path`` or the user config directory.

    A missing default file yields the built-in defaults; a missing explicit
    path is an error.
    """
    if path is None:
        path = config_dir() / CONFIG_FILE
        if not path.is_file():
            LOGGER.debug("No settings file at %s, using defaults", path)
            return Settings()
    elif not path.is_file():
        raise ConfigLoadError(f"Settings file {path} does not exist")

    doc = read_yaml(path, load_error=ConfigLoadError, validation_error=ConfigValidationError)
    return _build_settings(doc, path)
