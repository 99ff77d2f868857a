#  Copyright (c) LTS Design 2026-10-17.

from abc import ABC
from typing import IO, Optional, Type

import click
from hexdump import hexdump

from .logging import stream


class StreamHook(ABC):
    read_key: str
    write_key: str

    def __init__(self) -> None:
        self.read_key = f"_read_{id(self)}"
        self.write_key = f"_write_{id(self)}"

    def read(self, io: IO[bytes], n: int) -> bytes:
        return getattr(io, self.read_key)(n)

    def write(self, io: IO[bytes], data: bytes) -> int:
        return getattr(io, self.write_key)(data)

    def on_after_read(self, data: bytes) -> Optional[bytes]:
        return data

    def on_before_write(self, data: bytes) -> Optional[bytes]:
        return data

    def attach(self, io: IO[bytes]) -> IO[bytes]:
        if hasattr(io, self.read_key):
            return io
        setattr(io, self.read_key, io.read)
        setattr(io, self.write_key, io.write)

        def read(n: int = 1) -> bytes:
            if self.is_unregistered(type(io)):
                return getattr(io, self.read_key)(n)
            data = self.read(io, n)
            data_new = self.on_after_read(data)
            if isinstance(data_new, bytes):
                data = data_new
            return data

        def write(data: bytes) -> int:
            if self.is_unregistered(type(io)):
                return getattr(io, self.write_key)(data)
            data_new = self.on_before_write(data)
            if isinstance(data_new, bytes):
                data = data_new
            return self.write(io, data)

        setattr(io, "read", read)
        setattr(io, "write", write)
        return io

    @classmethod
    def register(cls, target: Type, *hook_args, **hook_kwargs) -> None:
        if hasattr(target, f"__hook_unregistered_{cls.__name__}__"):
            delattr(target, f"__hook_unregistered_{cls.__name__}__")
        if hasattr(target, f"__init_hook_{cls.__name__}__"):
            return
        setattr(target, f"__init_hook_{cls.__name__}__", target.__init__)

        # noinspection PyArgumentList
        def init(self, *args, **kwargs):
            getattr(target, f"__init_hook_{cls.__name__}__")(self, *args, **kwargs)
            hook = cls(*hook_args, **hook_kwargs)
            hook.attach(self)

        setattr(target, "__init__", init)

    @classmethod
    def unregister(cls, target: Type):
        setattr(target, f"__hook_unregistered_{cls.__name__}__", True)
        __init__ = getattr(target, f"__init_hook_{cls.__name__}__", None)
        if __init__ is not None:
            setattr(target, "__init__", __init__)
            delattr(target, f"__init_hook_{cls.__name__}__")

    @classmethod
    def set_registered(cls, target: Type, registered: bool):
        if registered:
            cls.register(target)
        else:
            cls.unregister(target)

    @classmethod
    def is_unregistered(cls, target: Type):
        return hasattr(target, f"__hook_unregistered_{cls.__name__}__")


class LoggingStreamHook(StreamHook):
    """Dumps serial traffic (bootloader frames, configuration lines) to the log."""

    ASCII = bytes(range(32, 128)) + b"\r\n"
    buf: dict

    def __init__(self):
        super().__init__()
        self.buf = {"-> RX": "", "<- TX": ""}

    def _print(self, data: bytes, msg: str):
        if data and all(c in self.ASCII for c in data):
            data = data.decode().replace("\r", "")
            while "\n" in data:
                line, _, data = data.partition("\n")
                line = self.buf[msg] + line
                self.buf[msg] = ""
                if line:
                    stream(f"{msg}: '{line}'")
            self.buf[msg] += data
            return

        if self.buf[msg]:
            stream(f"{msg}: '{self.buf[msg]}'")
            self.buf[msg] = ""
        if not data:
            return

        for line in hexdump(data, "generator"):
            stream(f"{msg}: {line.partition(': ')[2]}")

    def on_after_read(self, data: bytes) -> Optional[bytes]:
        if not data:
            return None
        self._print(data, "-> RX")
        return None

    def on_before_write(self, data: bytes) -> Optional[bytes]:
        self._print(b"", "-> RX")  # print leftover bytes
        self._print(bytes(data), "<- TX")
        return None


class ClickProgressCallback:
    def __init__(self, length: int = 100, width: int = 64):
        self.bar = click.progressbar(length=length, width=width)
        self.pos = 0

    def on_update(self, steps: int) -> None:
        self.pos += steps
        self.bar.update(steps)

    def on_total(self, total: Optional[int]) -> None:
        self.pos = 0
        self.bar.pos = 0
        self.bar.length = total
        self.bar.render_progress()

    def on_message(self, message: Optional[str]) -> None:
        self.bar.label = message or ""
        self.bar.render_progress()

    def on_percent(self, percent: int) -> None:
        # the bar only moves forward; a drop means a new operation started
        if percent < self.pos:
            self.on_total(100)
        if percent > self.pos:
            self.on_update(percent - self.pos)

    def finish(self) -> None:
        self.bar.render_finish()
