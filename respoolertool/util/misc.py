#  Copyright (c) LTS Design 2026-10-17.

from dataclasses import dataclass
from typing import List, Optional


# https://stackoverflow.com/a/1094933/9438331
def sizeof(num: int, suffix="B", base=1024.0) -> str:
    for unit in ["", "K", "M", "G", "T", "P", "E", "Z"]:
        if base == 1024 and unit:
            unit += "i"
        if abs(num) < base:
            return f"{num:.1f} {unit}{suffix}".replace(".0 ", " ")
        num /= base
    return f"{num:.1f} Y{suffix}".replace(".0 ", " ")


@dataclass
class SerialPortInfo:
    device: str
    description: str = ""
    vid: Optional[int] = None
    pid: Optional[int] = None
    manufacturer: Optional[str] = None

    @property
    def is_usb(self) -> bool:
        return self.vid is not None

    def __str__(self) -> str:
        if self.is_usb:
            return (
                f"{self.device} - {self.description} - "
                f"{self.manufacturer} ({self.vid:04X}/{self.pid or 0:04X})"
            )
        if self.description:
            return f"{self.device} - {self.description}"
        return self.device


def list_serial_ports() -> List[SerialPortInfo]:
    from serial.tools.list_ports import comports

    ports = []
    for port in comports():
        description = port.description.replace(f"({port.name})", "").strip()
        ports.append(
            SerialPortInfo(
                device=port.device,
                description=description,
                vid=port.vid,
                pid=port.pid,
                manufacturer=port.manufacturer,
            )
        )

    return sorted(ports, key=lambda p: (not p.is_usb, str(p)))


def find_port_info(device: str) -> SerialPortInfo:
    for port in list_serial_ports():
        if port.device == device:
            return port
    # not enumerated (e.g. a socket:// URL) - no USB IDs to go by
    return SerialPortInfo(device=device)
