#  Copyright (c) LTS Design 2026-10-17.

from .board import (
    ALLOWED_USB_VIDS,
    CHIP_FAMILY_TOKEN,
    CHIP_SIBLING_SUFFIXES,
    FIRMWARE_VERSION_URL,
    BoardParamType,
    BoardProfile,
    BoardVariant,
    SubVariant,
    SubVariantParamType,
)
from .enums import FlashState, ResetStrategy

__all__ = [
    "ALLOWED_USB_VIDS",
    "BoardParamType",
    "BoardProfile",
    "BoardVariant",
    "CHIP_FAMILY_TOKEN",
    "CHIP_SIBLING_SUFFIXES",
    "FIRMWARE_VERSION_URL",
    "FlashState",
    "ResetStrategy",
    "SubVariant",
    "SubVariantParamType",
]
