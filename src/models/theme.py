"""Theme overrides - recolour named layers of an animation"""

from dataclasses import dataclass, field
from typing import Dict, Tuple

RGBA = Tuple[int, int, int, int]


def parse_hex_color(value: str) -> RGBA:
    """
    Parse "#RRGGBB" or "#RRGGBBAA" (leading # optional).

    Raises:
        ValueError: if the string is not a hex colour
    """
    text = value.lstrip("#")
    if len(text) not in (6, 8):
        raise ValueError(f"Invalid hex colour: '{value}'")
    try:
        channels = [int(text[i:i + 2], 16) for i in range(0, len(text), 2)]
    except ValueError:
        raise ValueError(f"Invalid hex colour: '{value}'") from None
    if len(channels) == 3:
        channels.append(255)
    return (channels[0], channels[1], channels[2], channels[3])


@dataclass(frozen=True)
class Theme:
    """Layer name -> RGBA colour override"""
    colors: Dict[str, RGBA] = field(default_factory=dict)

    @classmethod
    def from_hex(cls, colors: Dict[str, str]) -> 'Theme':
        return cls({layer: parse_hex_color(value) for layer, value in colors.items()})

    def color_for(self, layer: str):
        return self.colors.get(layer)
