#  Copyright (c) LTS Design 2026-10-17.

from logging import WARNING, warning
from os.path import basename, dirname, join
from typing import Dict, Iterable, List, Optional

import click
from click import Command, Context, Group

from .logging import graph
from .misc import list_serial_ports


def get_multi_command_class(cmds: Dict[str, str]):
    class CLIClass(Group):
        def list_commands(self, ctx: Context) -> List[str]:
            ctx.ensure_object(dict)
            return list(cmds.keys())

        def get_command(self, ctx: Context, cmd_name: str) -> Optional[Command]:
            if cmd_name not in cmds:
                return None
            ns = {}
            fn = join(dirname(__file__), "..", "..", cmds[cmd_name])
            mp = cmds[cmd_name].rpartition("/")[0].replace("/", ".")
            mn = basename(fn).rpartition(".")[0]
            with open(fn, encoding="utf-8") as f:
                code = compile(f.read(), fn, "exec")
                ns["__file__"] = fn
                ns["__name__"] = f"{mp}.{mn}"
                eval(code, ns, ns)
            return ns["cli"]

    return CLIClass


def find_serial_port(allowed_vids: Iterable[int] = ()) -> Optional[str]:
    allowed_vids = set(allowed_vids)
    graph(0, "Available COM ports:")
    ports = list_serial_ports()
    if not ports:
        warning("No COM ports found! Use -d/--device to specify the port manually.")
        return None
    # prefer adapters that are known to back ESP32 boards
    chosen = next((p for p in ports if p.vid in allowed_vids), ports[0])
    for port in ports:
        graph(1, str(port))
        if port is chosen:
            graph(2, "Selecting this port. To override, use -d/--device")
            if not port.is_usb:
                graph(2, "This is not a USB COM port", loglevel=WARNING)
    return chosen.device


class DevicePortParamType(click.ParamType):
    name = "DEVICE"

    def __init__(self, allowed_vids: Iterable[int] = ()) -> None:
        super().__init__()
        self.allowed_vids = tuple(allowed_vids)

    def convert(self, value, param, ctx) -> Optional[str]:
        if isinstance(value, tuple):
            # special default value to auto-detect a serial port;
            # None is passed on and treated as a cancelled port selection
            return find_serial_port(self.allowed_vids)
        return value
