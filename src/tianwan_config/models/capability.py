"""Capability vocabulary for inference routing.

A capability is a detection function a camera stream can be routed to.
The inventory workbook names capabilities with hand-entered labels; the
tables below map those labels and the server-side endpoint paths.
"""

from enum import Enum


class Capability(str, Enum):
    """Canonical capability identifier enumeration."""

    HELMET = "helmet"
    MOUSE = "mouse"
    TSHIRT = "tshirt"
    PONDING = "ponding"
    FALL = "fall"
    SAFETY_BELT = "safetybelt"
    CIGAR = "cigar"
    GESTURE = "gesture"
    SMOKE = "smoke"
    FIRE = "fire"


# Labels as they appear in the inventory workbook
DEFAULT_VOCABULARY: dict[str, Capability] = {
    "安全帽": Capability.HELMET,
    "老鼠": Capability.MOUSE,
    "短袖": Capability.TSHIRT,
    "积水": Capability.PONDING,
    "倒地": Capability.FALL,
    "安全带": Capability.SAFETY_BELT,
    "吸烟": Capability.CIGAR,
    "手势": Capability.GESTURE,
    "烟雾": Capability.SMOKE,
    "火焰": Capability.FIRE,
}

# Served by every type-A address; order drives server display names only
TYPE_A_CAPABILITIES: tuple[Capability, ...] = (
    Capability.MOUSE,
    Capability.PONDING,
    Capability.CIGAR,
    Capability.GESTURE,
    Capability.FALL,
    Capability.TSHIRT,
    Capability.HELMET,
    Capability.SMOKE,
    Capability.FIRE,
)

SPECIALIZED_CAPABILITY = Capability.SAFETY_BELT

# Every camera is monitored for these, whatever the inventory says
DEFAULT_CAPABILITIES: tuple[Capability, ...] = (
    Capability.CIGAR,
    Capability.GESTURE,
    Capability.SMOKE,
    Capability.FIRE,
)

# The fire model is served behind the smoke endpoint
DEFAULT_ENDPOINT_ALIASES: dict[Capability, Capability] = {
    Capability.FIRE: Capability.SMOKE,
}
