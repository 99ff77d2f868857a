#  Copyright (c) LTS Design 2026-10-17.

from logging import debug, warning
from typing import Callable, Optional, Tuple

from serial import Serial, SerialException

from respoolertool.util.logging import verbose
from respoolertool.util.misc import SerialPortInfo

from .errors import NoPortSelected
from .session import Session

PortSelector = Callable[[], Optional[SerialPortInfo]]
PortFactory = Callable[[str], Serial]


def open_serial_handle(device: str) -> Serial:
    # bound to the device, but not opened yet
    port = Serial()
    port.port = device
    return port


class PortGuard:
    """
    Owns the serial port handle and the loader bound to it.

    release() may be called any number of times, from any failure path;
    it never raises.
    """

    def __init__(self, port_factory: PortFactory = open_serial_handle) -> None:
        self.port_factory = port_factory

    def acquire(self, selector: PortSelector) -> Tuple[SerialPortInfo, Serial]:
        info = selector()
        if info is None:
            raise NoPortSelected()
        debug(f"Selected port: {info}")
        return info, self.port_factory(info.device)

    @staticmethod
    def open(session: Session, baudrate: int) -> None:
        port = session.port
        if port is None:
            raise NoPortSelected("No serial connection open")
        port.baudrate = baudrate
        if not port.is_open:
            verbose(f"Opening {session.port_name} @ {baudrate}")
            port.open()

    @staticmethod
    def release_loader(session: Optional[Session]) -> None:
        if session is None or session.loader is None:
            return
        loader = session.loader
        session.loader = None
        try:
            loader.disconnect()
        except Exception as e:
            warning(f"Couldn't disconnect the loader: {e}")

    def release_transport(self, session: Optional[Session]) -> None:
        """Drop the loader and close the port, keeping the handle for reopening."""
        if session is None:
            return
        self.release_loader(session)
        if session.port is not None:
            self._close(session.port, session.port_name)

    def release(self, session: Optional[Session]) -> None:
        if session is None:
            return
        self.release_loader(session)
        port = session.port
        session.port = None
        if port is not None:
            self._close(port, session.port_name)

    @staticmethod
    def _close(port: Serial, name: str) -> None:
        try:
            if port.is_open:
                verbose(f"Closing {name}")
                port.close()
        except (SerialException, OSError) as e:
            warning(f"Couldn't close {name}: {e}")
