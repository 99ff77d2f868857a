#  Copyright (c) LTS Design 2026-10-17.

from dataclasses import dataclass
from typing import Optional

from serial import Serial

from respoolertool.models import BoardVariant, SubVariant
from respoolertool.util.misc import SerialPortInfo

from .interface import FlashLoader


@dataclass
class Session:
    port: Optional[Serial]
    port_info: Optional[SerialPortInfo]
    variant: BoardVariant = BoardVariant.DEVKIT
    sub_variant: SubVariant = SubVariant.STANDARD
    loader: Optional[FlashLoader] = None
    chip_family: Optional[str] = None

    @property
    def port_name(self) -> str:
        return self.port_info.device if self.port_info else "(no port)"

    @property
    def is_released(self) -> bool:
        return self.port is None and self.loader is None
