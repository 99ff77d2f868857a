#  Copyright (c) LTS Design 2026-10-17.

from respoolertool.flasher import ResetSignaler
from respoolertool.flasher.reset import RESET_BAUDRATE, RESET_SETTLE_DELAY
from respoolertool.models import ResetStrategy

EN_ONLY_LINES = [(False, False), (False, True), (False, False)]
DTR_RTS_LINES = [(False, True), (True, False), (False, False)]


def test_en_only_sequence(fake_serial, clock):
    fake_serial.is_open = True
    assert ResetSignaler(clock).reset(fake_serial, ResetStrategy.EN_ONLY)
    assert fake_serial.lines == EN_ONLY_LINES
    assert clock.calls == [0.060, 0.140, 0.180]


def test_dtr_rts_sequence(fake_serial, clock):
    fake_serial.is_open = True
    assert ResetSignaler(clock).reset(fake_serial, ResetStrategy.DTR_RTS)
    assert fake_serial.lines == DTR_RTS_LINES
    assert clock.calls == [0.120, 0.120, 0.120]


def test_closed_port_is_opened_first(fake_serial, clock):
    assert ResetSignaler(clock).reset(fake_serial, ResetStrategy.EN_ONLY)
    assert fake_serial.open_baudrates == [RESET_BAUDRATE]
    assert clock.calls[0] == RESET_SETTLE_DELAY
    assert fake_serial.lines == EN_ONLY_LINES


def test_no_port(clock):
    assert not ResetSignaler(clock).reset(None)
    assert clock.calls == []


def test_fallback_to_dtr_rts(make_serial, clock):
    port = make_serial(rts_errors=1)
    port.is_open = True
    assert ResetSignaler(clock).reset(port)
    assert port.lines == DTR_RTS_LINES


def test_default_order_starts_with_en_only(fake_serial, clock):
    fake_serial.is_open = True
    assert ResetSignaler(clock).reset(fake_serial)
    assert fake_serial.lines == EN_ONLY_LINES


def test_reopens_once_when_port_closes(make_serial, clock):
    port = make_serial(close_after_lines=1)
    port.is_open = True
    assert ResetSignaler(clock).reset(port, ResetStrategy.EN_ONLY)
    assert port.open_count == 1
    # the interrupted first step, then the whole sequence again
    assert port.lines == EN_ONLY_LINES[:1] + EN_ONLY_LINES


def test_second_failure_is_swallowed(make_serial, clock):
    port = make_serial(drop_every_line=True)
    port.is_open = True
    assert not ResetSignaler(clock).reset(port, ResetStrategy.DTR_RTS)
    assert port.open_count == 1


def test_open_failure_is_swallowed(make_serial, clock):
    port = make_serial(open_error=OSError("Permission denied"))
    assert not ResetSignaler(clock).reset(port)
    assert port.lines == []
