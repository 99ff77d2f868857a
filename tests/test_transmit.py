#  Copyright (c) LTS Design 2026-10-17.

from serial import SerialException

from respoolertool.flasher import VariantConfigTransmitter, config_payload
from respoolertool.flasher.transmit import CONFIG_BAUDRATE, PROCESS_DELAY
from respoolertool.models import SubVariant


def test_payload():
    assert config_payload(SubVariant.STANDARD) == b'{"SET":{"VAR":"STD"}}\n'
    assert config_payload(SubVariant.PRO) == b'{"SET":{"VAR":"PRO"}}\n'


def test_send_on_open_port(fake_serial, clock):
    fake_serial.is_open = True
    assert VariantConfigTransmitter(clock).send(fake_serial, SubVariant.PRO)
    assert fake_serial.written == [b'{"SET":{"VAR":"PRO"}}\n']
    assert fake_serial.flushed == 1
    assert fake_serial.open_count == 0
    assert clock.calls == [PROCESS_DELAY]


def test_opens_after_waiting(fake_serial, clock):
    assert VariantConfigTransmitter(clock).send(fake_serial, SubVariant.STANDARD)
    # polled every 100 ms for 5 s before opening
    assert clock.calls[:-1] == [0.100] * 50
    assert fake_serial.open_baudrates == [CONFIG_BAUDRATE]
    assert fake_serial.written == [b'{"SET":{"VAR":"STD"}}\n']


def test_open_failure_is_swallowed(make_serial, clock):
    port = make_serial(open_error=SerialException("could not open port"))
    assert not VariantConfigTransmitter(clock).send(port, SubVariant.PRO)
    assert port.written == []


def test_write_failure_is_swallowed(make_serial, clock):
    port = make_serial(write_error=SerialException("write failed"))
    port.is_open = True
    assert not VariantConfigTransmitter(clock).send(port, SubVariant.PRO)
    assert clock.calls == [PROCESS_DELAY]


def test_no_port(clock):
    assert not VariantConfigTransmitter(clock).send(None, SubVariant.PRO)
