#  Copyright (c) LTS Design 2026-10-17.

from abc import ABC
from dataclasses import dataclass
from typing import Callable, Optional

from serial import Serial

ProgressFunc = Callable[[int, int], None]


@dataclass
class ChipInfo:
    name: Optional[str]
    description: Optional[str] = None
    mac: Optional[str] = None


class FlashLoader(ABC):
    """
    A flashing protocol session bound to an already open serial port.

    One instance serves exactly one handshake; callers construct a new
    loader for every connection attempt.
    """

    port: Serial
    baudrate: int

    def __init__(self, port: Serial, baudrate: int) -> None:
        self.port = port
        self.baudrate = baudrate

    def handshake(self) -> ChipInfo:
        """
        Synchronize with the chip's bootloader and identify it.

        Blocks until the chip answers. Callers bound the time spent here;
        closing the port makes a pending handshake fail.

        :return: the chip identification
        """
        raise NotImplementedError()

    def write_image(
        self,
        address: int,
        data: bytes,
        on_progress: ProgressFunc,
        erase_all: bool = False,
        compress: bool = True,
        flash_mode: str = "keep",
        flash_freq: str = "keep",
        flash_size: str = "4MB",
    ) -> None:
        """
        Write 'data' to flash, starting at 'address'.

        :param address: start flash offset
        :param data: the image to write
        :param on_progress: called with (bytes written, bytes total)
        :param erase_all: erase the entire flash chip first
        :param compress: transfer the image deflate-compressed
        :param flash_mode: SPI mode stored in the image header, or "keep"
        :param flash_freq: SPI frequency stored in the image header, or "keep"
        :param flash_size: assumed flash chip size
        """
        raise NotImplementedError()

    def disconnect(self) -> None:
        """Drop the protocol session. The serial port itself stays open."""
        raise NotImplementedError()


LoaderFactory = Callable[[Serial, int], FlashLoader]
