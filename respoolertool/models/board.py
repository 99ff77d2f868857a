#  Copyright (c) LTS Design 2026-10-17.

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import click

from .enums import ResetStrategy

FIRMWARE_BASE_URL = "https://download.lts-design.com/Firmware"
FIRMWARE_VERSION_URL = f"{FIRMWARE_BASE_URL}/latest_board_firmware.txt"

CHIP_FAMILY_TOKEN = "ESP32"
# names containing the family token which are not the plain ESP32
CHIP_SIBLING_SUFFIXES = ("S2", "S3", "C3")

# USB-serial bridges found on ESP32 boards
ALLOWED_USB_VIDS = {
    0x303A: "Espressif (native USB)",
    0x10C4: "Silicon Labs CP210x",
    0x1A86: "WCH CH340/CH9102",
    0x0403: "FTDI",
}


@dataclass(frozen=True)
class BoardProfile:
    key: str
    title: str
    firmware_url: str
    chip_family: str
    baudrate: int
    reset_strategy: ResetStrategy
    native_usb: bool


class BoardVariant(Enum):
    DEVKIT = BoardProfile(
        key="dev",
        title="ESP32 DevKit",
        firmware_url=f"{FIRMWARE_BASE_URL}/ESP32-WROOM-32_latest.bin",
        chip_family="ESP32",
        # USB-UART bridges drop out at 921600 (notably on Windows)
        baudrate=115200,
        reset_strategy=ResetStrategy.EN_ONLY,
        native_usb=False,
    )
    CONTROL_BOARD_V4 = BoardProfile(
        key="v4",
        title="Control Board",
        firmware_url=f"{FIRMWARE_BASE_URL}/ControlBoard_V4_latest.bin",
        chip_family="ESP32-S3",
        baudrate=921600,
        reset_strategy=ResetStrategy.DTR_RTS,
        native_usb=True,
    )

    @property
    def profile(self) -> BoardProfile:
        return self.value

    @classmethod
    def from_key(cls, key: Optional[str]) -> Optional["BoardVariant"]:
        return next((v for v in cls if v.profile.key == key), None)


class SubVariant(Enum):
    STANDARD = "std"
    PRO = "pro"

    @property
    def payload(self) -> str:
        return self.value.upper()

    @classmethod
    def from_key(cls, key: Optional[str]) -> Optional["SubVariant"]:
        return next((v for v in cls if v.value == key), None)


class BoardParamType(click.ParamType):
    name = "board"

    def convert(self, value, param, ctx) -> BoardVariant:
        if isinstance(value, BoardVariant):
            return value
        variant = BoardVariant.from_key(str(value).lower())
        if not variant:
            keys = ", ".join(v.profile.key for v in BoardVariant)
            self.fail(f"Board {value} does not exist (choose from {keys})", param, ctx)
        return variant


class SubVariantParamType(click.ParamType):
    name = "variant"

    def convert(self, value, param, ctx) -> SubVariant:
        if isinstance(value, SubVariant):
            return value
        sub_variant = SubVariant.from_key(str(value).lower())
        if not sub_variant:
            keys = ", ".join(v.value for v in SubVariant)
            self.fail(f"Variant {value} does not exist (choose from {keys})", param, ctx)
        return sub_variant
