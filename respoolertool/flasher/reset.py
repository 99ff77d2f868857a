#  Copyright (c) LTS Design 2026-10-17.

import os
from logging import debug, error
from time import sleep as time_sleep
from typing import Callable, List, Optional, Tuple

from serial import Serial
from serial.serialutil import PortNotOpenError, SerialException

from respoolertool.models import ResetStrategy
from respoolertool.util.logging import verbose

from .errors import ResetFailed

RESET_BAUDRATE = 115200
RESET_SETTLE_DELAY = 0.150

# (DTR, RTS, hold time) - RTS drives CHIP_EN low, DTR drives GPIO0 low
RESET_SEQUENCES: dict[ResetStrategy, List[Tuple[bool, bool, float]]] = {
    ResetStrategy.EN_ONLY: [
        (False, False, 0.060),
        (False, True, 0.140),
        (False, False, 0.180),
    ],
    ResetStrategy.DTR_RTS: [
        (False, True, 0.120),
        (True, False, 0.120),
        (False, False, 0.120),
    ],
}


class ResetSignaler:
    """
    Hardware reset through the serial control lines.

    Resetting is advisory: every method here returns normally, whatever
    the port does.
    """

    def __init__(self, sleep: Callable[[float], None] = time_sleep) -> None:
        self.sleep = sleep

    def reset(self, port: Optional[Serial], strategy: ResetStrategy = None) -> bool:
        """
        Pulse the reset line(s) of the chip.

        :param port: the serial port; opened at 115200 if it's closed
        :param strategy: pulse sequence to use; when None, EN-only is tried
            first and DTR/RTS is used if it fails
        :return: whether any sequence went through
        """
        if port is None:
            return False
        self._ensure_open(port)
        strategies = [strategy] if strategy else list(RESET_SEQUENCES)
        for item in strategies:
            try:
                self._pulse_with_retry(port, item)
                return True
            except ResetFailed as e:
                error(f"Hardware reset failed: {e}")
        return False

    def _ensure_open(self, port: Serial) -> None:
        try:
            if not port.is_open:
                verbose(f"Opening port for reset @ {RESET_BAUDRATE}")
                port.baudrate = RESET_BAUDRATE
                port.open()
                self.sleep(RESET_SETTLE_DELAY)
        except (SerialException, OSError, ValueError) as e:
            debug(f"Couldn't open port for reset: {e}")

    def _pulse_with_retry(self, port: Serial, strategy: ResetStrategy) -> None:
        try:
            self._pulse(port, strategy)
        except PortNotOpenError:
            # closed under our feet (released by a previous consumer)
            debug(f"Port closed during {strategy.value} reset, reopening")
            self._ensure_open(port)
            try:
                self._pulse(port, strategy)
            except (SerialException, OSError) as e:
                raise ResetFailed(f"{strategy.value} (after reopening): {e}") from e
        except (SerialException, OSError) as e:
            raise ResetFailed(f"{strategy.value}: {e}") from e

    def _pulse(self, port: Serial, strategy: ResetStrategy) -> None:
        debug(f"Hardware reset ({strategy.value})")
        for dtr, rts, hold in RESET_SEQUENCES[strategy]:
            if not port.is_open:
                raise PortNotOpenError()
            port.dtr = dtr
            port.rts = rts
            if os.name == "nt":
                # usbser.sys only propagates RTS together with a DTR change
                port.dtr = dtr
            self.sleep(hold)
