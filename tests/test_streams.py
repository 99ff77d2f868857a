#  Copyright (c) LTS Design 2026-10-17.

from io import BytesIO

from respoolertool.util.streams import LoggingStreamHook


class DumpedPort(BytesIO):
    pass


def test_hook_passes_data_through():
    LoggingStreamHook.register(DumpedPort)
    try:
        port = DumpedPort()
        port.write(b'{"SET":{"VAR":"PRO"}}\n')
        port.write(b"\xc0\x00\x08\x24\x00\xc0")
        assert port.getvalue() == b'{"SET":{"VAR":"PRO"}}\n\xc0\x00\x08\x24\x00\xc0'
        port.seek(0)
        assert port.read(3) == b'{"S'
    finally:
        LoggingStreamHook.unregister(DumpedPort)


def test_unregistered_hook_is_bypassed():
    LoggingStreamHook.set_registered(DumpedPort, True)
    port = DumpedPort()
    LoggingStreamHook.set_registered(DumpedPort, False)
    assert LoggingStreamHook.is_unregistered(DumpedPort)
    assert port.write(b"abc") == 3
    assert port.getvalue() == b"abc"
