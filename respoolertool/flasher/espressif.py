#  Copyright (c) LTS Design 2026-10-17.

import hashlib
import zlib
from logging import debug
from typing import Optional

from esptool.cmds import detect_chip
from esptool.loader import ERASE_WRITE_TIMEOUT_PER_MB, ESPLoader, timeout_per_mb
from esptool.util import flash_size_bytes
from serial import Serial

from respoolertool.util.logging import verbose
from respoolertool.util.misc import sizeof

from .interface import ChipInfo, FlashLoader, ProgressFunc


class EsptoolLoader(FlashLoader):
    """FlashLoader backed by esptool's ROM/stub protocol implementation."""

    esp: Optional[ESPLoader] = None

    def __init__(self, port: Serial, baudrate: int) -> None:
        super().__init__(port, baudrate)
        self.esp = None

    def handshake(self) -> ChipInfo:
        if not self.port.is_open:
            self.port.baudrate = ESPLoader.ESP_ROM_BAUD
            self.port.open()
        esp = detect_chip(
            port=self.port,
            baud=ESPLoader.ESP_ROM_BAUD,
            connect_mode="default_reset",
        )
        debug(f"Chip detected: {esp.CHIP_NAME}, uploading stub")
        esp = esp.run_stub()
        if self.baudrate != ESPLoader.ESP_ROM_BAUD:
            verbose(f"Changing baud rate to {self.baudrate}")
            esp.change_baud(self.baudrate)
        self.esp = esp
        return ChipInfo(
            name=esp.CHIP_NAME,
            description=esp.get_chip_description(),
            mac=":".join(f"{b:02X}" for b in esp.read_mac()),
        )

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
        esp = self.esp
        if esp is None:
            raise RuntimeError("Loader is not connected")
        for name, value in (("flash mode", flash_mode), ("flash frequency", flash_freq)):
            if value != "keep":
                # rewriting the image header is not supported
                raise ValueError(f"Unsupported {name} '{value}', only 'keep' is allowed")

        if erase_all:
            debug("Erasing entire flash chip")
            esp.erase_flash()
        esp.flash_set_parameters(flash_size_bytes(flash_size))

        total = len(data)
        if compress:
            payload = zlib.compress(data, 9)
            esp.flash_defl_begin(total, len(payload), address)
        else:
            payload = data
            esp.flash_begin(total, address)
        debug(
            f"Writing {sizeof(total)} @ 0x{address:X} "
            f"({sizeof(len(payload))} transferred)"
        )

        block_size = esp.FLASH_WRITE_SIZE
        on_progress(0, total)
        for seq, pos in enumerate(range(0, len(payload), block_size)):
            block = payload[pos : pos + block_size]
            if compress:
                # erasing is timed by the uncompressed size of the block
                ratio = total / len(payload)
                timeout = timeout_per_mb(
                    ERASE_WRITE_TIMEOUT_PER_MB, int(len(block) * ratio)
                )
                esp.flash_defl_block(block, seq, timeout=timeout)
            else:
                block = block + b"\xFF" * (block_size - len(block))
                esp.flash_block(block, seq)
            sent = pos + len(block)
            on_progress(min(total, sent * total // len(payload)), total)

        expected = hashlib.md5(data).hexdigest()
        actual = esp.flash_md5sum(address, total)
        if isinstance(actual, bytes):
            actual = actual.hex()
        if actual != expected:
            raise ValueError(f"MD5 of file does not match data in flash ({actual})")
        verbose(f"Hash of data verified: {expected}")

        if esp.IS_STUB:
            # leave flashing mode without rebooting into the firmware
            esp.flash_begin(0, 0)
            if compress:
                esp.flash_defl_finish(False)
            else:
                esp.flash_finish(False)

    def disconnect(self) -> None:
        self.esp = None
