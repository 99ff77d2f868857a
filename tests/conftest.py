#  Copyright (c) LTS Design 2026-10-17.

import time
from typing import List, Optional

import pytest
from serial.serialutil import SerialException

from respoolertool.flasher import (
    ChipInfo,
    FlashListener,
    FlashLoader,
    FlashOrchestrator,
    OrchestratorContext,
    PortGuard,
    Session,
)
from respoolertool.util.misc import SerialPortInfo
from respoolertool.util.prefs import PreferenceStore


class FakeSerial:
    """Stands in for an unopened pyserial Serial bound to a device."""

    def __init__(
        self,
        device: str = "/dev/ttyUSB0",
        open_error: Exception = None,
        close_error: Exception = None,
        write_error: Exception = None,
        rts_errors: int = 0,
        close_after_lines: int = None,
        drop_every_line: bool = False,
    ):
        self.port = device
        self.baudrate = 9600
        self.is_open = False
        self.open_error = open_error
        self.close_error = close_error
        self.write_error = write_error
        self.rts_errors = rts_errors
        self.close_after_lines = close_after_lines
        self.drop_every_line = drop_every_line
        self.open_count = 0
        self.open_baudrates: List[int] = []
        self.lines = []
        self.written: List[bytes] = []
        self.flushed = 0
        self._dtr = False
        self._rts = False

    def open(self):
        if self.open_error:
            raise self.open_error
        self.is_open = True
        self.open_count += 1
        self.open_baudrates.append(self.baudrate)

    def close(self):
        if self.close_error:
            raise self.close_error
        self.is_open = False

    @property
    def dtr(self):
        return self._dtr

    @dtr.setter
    def dtr(self, value):
        self._dtr = value

    @property
    def rts(self):
        return self._rts

    @rts.setter
    def rts(self, value):
        if self.rts_errors:
            self.rts_errors -= 1
            raise SerialException("ClearCommError failed")
        self._rts = value
        self.lines.append((self._dtr, value))
        if self.drop_every_line:
            self.is_open = False
        elif self.close_after_lines and len(self.lines) >= self.close_after_lines:
            self.is_open = False
            self.close_after_lines = None

    def write(self, data: bytes) -> int:
        if self.write_error:
            raise self.write_error
        self.written.append(bytes(data))
        return len(data)

    def flush(self):
        self.flushed += 1


class SleepClock:
    """Records sleep calls instead of sleeping."""

    def __init__(self):
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)

    @property
    def elapsed(self) -> float:
        return sum(self.calls)


class FakeLoader(FlashLoader):
    def __init__(self, port, baudrate, factory: "FakeLoaderFactory"):
        super().__init__(port, baudrate)
        self.factory = factory
        self.disconnected = False
        self.writes = []

    def handshake(self) -> ChipInfo:
        if self.factory.handshake_error:
            raise self.factory.handshake_error
        if self.factory.block_handshake:
            # a chip which never answers; aborted by closing the port
            for _ in range(500):
                if not self.port.is_open:
                    break
                time.sleep(0.01)
            raise SerialException("Port closed while waiting for sync")
        name = self.factory.chip_name
        return ChipInfo(name=name, description=f"{name} (revision v0.1)")

    def write_image(self, address, data, on_progress, **kwargs) -> None:
        self.writes.append((address, data, kwargs))
        if self.factory.write_error:
            raise self.factory.write_error
        total = len(data)
        for written in (0, total // 2, total):
            on_progress(written, total)

    def disconnect(self) -> None:
        self.disconnected = True


class FakeLoaderFactory:
    def __init__(
        self,
        chip_name: Optional[str] = "ESP32",
        handshake_error: Exception = None,
        write_error: Exception = None,
        block_handshake: bool = False,
    ):
        self.chip_name = chip_name
        self.handshake_error = handshake_error
        self.write_error = write_error
        self.block_handshake = block_handshake
        self.loaders: List[FakeLoader] = []

    def __call__(self, port, baudrate) -> FakeLoader:
        loader = FakeLoader(port, baudrate, self)
        self.loaders.append(loader)
        return loader


class FakeFirmware:
    def __init__(self, image: bytes = b"\xe9" + bytes(1023), error: Exception = None):
        self.image = image
        self.error = error
        self.requested = []

    def fetch_image(self, variant) -> bytes:
        self.requested.append(variant)
        if self.error:
            raise self.error
        return self.image

    def fetch_latest_version(self) -> str:
        return "1.0.0"


class RecordingListener(FlashListener):
    def __init__(self):
        self.states = []
        self.progress = []
        self.controls = []
        self.terminal = []
        self.driver_help = []

    def on_state(self, state):
        self.states.append(state)

    def on_progress(self, progress):
        self.progress.append(progress)

    def on_controls(self, controls):
        self.controls.append(controls)

    def on_terminal(self, result):
        self.terminal.append(result)

    def on_driver_help(self, driver_help):
        self.driver_help.append(driver_help)

    @property
    def labels(self) -> List[str]:
        return [p.label for p in self.progress]


class Rig:
    """A FlashOrchestrator wired to fakes only."""

    def __init__(self, tmp_path, serial: FakeSerial = None, **loader_kwargs):
        self.serial = serial or FakeSerial()
        self.port_info = SerialPortInfo(
            device="/dev/ttyUSB0",
            description="CP2102 USB to UART Bridge Controller",
            vid=0x10C4,
            pid=0xEA60,
            manufacturer="Silicon Labs",
        )
        self.loaders = FakeLoaderFactory(**loader_kwargs)
        self.firmware = FakeFirmware()
        self.clock = SleepClock()
        self.scheduled = []
        self.listener = RecordingListener()
        self.prefs = PreferenceStore(str(tmp_path / "preferences.json"))
        self.context = OrchestratorContext(
            prefs=self.prefs,
            listener=self.listener,
            sleep=self.clock,
            schedule=lambda delay, func: self.scheduled.append((delay, func)),
        )
        self.orchestrator = FlashOrchestrator(
            context=self.context,
            loader_factory=self.loaders,
            firmware=self.firmware,
            guard=PortGuard(port_factory=lambda device: self.serial),
            handshake_timeout=2.0,
        )

    def select(self) -> SerialPortInfo:
        return self.port_info


@pytest.fixture
def clock() -> SleepClock:
    return SleepClock()


@pytest.fixture
def fake_serial() -> FakeSerial:
    return FakeSerial()


@pytest.fixture
def prefs(tmp_path) -> PreferenceStore:
    return PreferenceStore(str(tmp_path / "preferences.json"))


@pytest.fixture
def session(fake_serial) -> Session:
    return Session(
        port=fake_serial,
        port_info=SerialPortInfo(device="/dev/ttyUSB0", vid=0x10C4, pid=0xEA60),
    )


@pytest.fixture
def make_serial():
    return FakeSerial


@pytest.fixture
def make_loaders():
    return FakeLoaderFactory


@pytest.fixture
def make_rig(tmp_path):
    def make(**kwargs) -> Rig:
        return Rig(tmp_path, **kwargs)

    return make


@pytest.fixture
def rig(make_rig) -> Rig:
    return make_rig()
