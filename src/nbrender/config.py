from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple

from ruamel.yaml import YAML

from .theme import DEFAULT_THEME, check_theme
from .transforms import DEFAULT_DISPLAY_ORDER, DEFAULT_TRANSFORMS, Transform

logger = logging.getLogger(__name__)

_KNOWN_KEYS = ("theme", "display_order")


@dataclass(frozen=True)
class RenderConfig:
    """Options recognized by the renderer.

    theme: "light" | "dark".
    display_order: MIME types in rendering priority.
    transforms: MIME type -> transform.
    """

    theme: str = DEFAULT_THEME
    display_order: Tuple[str, ...] = DEFAULT_DISPLAY_ORDER
    transforms: Mapping[str, Transform] = field(default_factory=lambda: dict(DEFAULT_TRANSFORMS))

    def __post_init__(self) -> None:
        check_theme(self.theme)


def config_from_mapping(data: Mapping[str, Any], base: Optional[RenderConfig] = None) -> RenderConfig:
    base = base or RenderConfig()
    for key in data:
        if key not in _KNOWN_KEYS:
            logger.debug("Ignoring unrecognized config key %r", key)

    theme = data.get("theme") or base.theme
    order = data.get("display_order")
    if order is None:
        display_order = base.display_order
    elif isinstance(order, (list, tuple)) and all(isinstance(m, str) for m in order):
        display_order = tuple(order)
    else:
        raise ValueError("display_order must be a list of MIME type strings")
    return RenderConfig(theme=str(theme), display_order=display_order, transforms=base.transforms)


def load_config(path: str, base: Optional[RenderConfig] = None) -> RenderConfig:
    """Read a YAML config file; an empty file yields the defaults."""
    yaml = YAML(typ="safe")
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.load(f)
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise ValueError(f"Config file {path} must contain a mapping")
    return config_from_mapping(data, base)
