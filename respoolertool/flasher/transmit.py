#  Copyright (c) LTS Design 2026-10-17.

import json
from logging import error
from time import sleep as time_sleep
from typing import Callable, Optional

from serial import Serial, SerialException

from respoolertool.models import SubVariant
from respoolertool.util.logging import graph, verbose

from .errors import ConfigWriteFailed

CONFIG_BAUDRATE = 115200
WRITABLE_POLL_INTERVAL = 0.100
WRITABLE_TIMEOUT = 5.0
PROCESS_DELAY = 0.200


def config_payload(sub_variant: SubVariant) -> bytes:
    line = json.dumps({"SET": {"VAR": sub_variant.payload}}, separators=(",", ":"))
    return f"{line}\n".encode("ascii")


class VariantConfigTransmitter:
    def __init__(self, sleep: Callable[[float], None] = time_sleep) -> None:
        self.sleep = sleep

    def send(self, port: Optional[Serial], sub_variant: SubVariant) -> bool:
        """
        Tell the freshly booted firmware which hardware variant it runs on.

        Failures are logged only; the firmware is already written at this point.

        :return: whether the line was written
        """
        if port is None:
            return False
        payload = config_payload(sub_variant)

        try:
            self._wait_writable(port)
        except ConfigWriteFailed as e:
            error(f"Failed to open serial for variant config: {e}")
            return False

        try:
            graph(1, f"Sending variant config: {payload.decode().strip()}")
            port.write(payload)
            port.flush()
            written = True
        except (SerialException, OSError) as e:
            error(f"Failed to send variant config over serial: {e}")
            written = False

        self.sleep(PROCESS_DELAY)
        return written

    def _wait_writable(self, port: Serial) -> None:
        # the port may still be settling after a reset
        for _ in range(round(WRITABLE_TIMEOUT / WRITABLE_POLL_INTERVAL)):
            if port.is_open:
                return
            self.sleep(WRITABLE_POLL_INTERVAL)
        verbose(f"Port not writable after {WRITABLE_TIMEOUT} s, opening")
        try:
            port.baudrate = CONFIG_BAUDRATE
            port.open()
        except (SerialException, OSError, ValueError) as e:
            raise ConfigWriteFailed(str(e)) from e
