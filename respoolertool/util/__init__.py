#  Copyright (c) LTS Design 2026-10-17.

from .cli import DevicePortParamType, find_serial_port, get_multi_command_class
from .deadline import run_with_deadline
from .fileio import readjson, readtext, writejson, writetext
from .flash import ProgressState, format_guide, percent_of
from .logging import VERBOSE, LoggingHandler, graph, log_setup_click_bars, verbose
from .misc import SerialPortInfo, find_port_info, list_serial_ports, sizeof
from .prefs import PREF_BOARD, PREF_VARIANT, PreferenceStore

__all__ = [
    "DevicePortParamType",
    "LoggingHandler",
    "PREF_BOARD",
    "PREF_VARIANT",
    "PreferenceStore",
    "ProgressState",
    "SerialPortInfo",
    "VERBOSE",
    "find_port_info",
    "find_serial_port",
    "format_guide",
    "get_multi_command_class",
    "graph",
    "list_serial_ports",
    "log_setup_click_bars",
    "percent_of",
    "readjson",
    "readtext",
    "run_with_deadline",
    "sizeof",
    "verbose",
    "writejson",
    "writetext",
]
