# Copyright (c) LTS Design 2026-10-17.

import click
from prettytable import PrettyTable

from respoolertool.models import ALLOWED_USB_VIDS, BoardVariant
from respoolertool.util.misc import list_serial_ports


@click.group(help="List serial ports, boards, etc.")
def cli():
    pass


@cli.command(help="List serial ports")
def ports():
    table = PrettyTable()
    table.field_names = [
        "Port",
        "Description",
        "VID:PID",
        "Bridge",
    ]
    table.align = "l"
    for port in list_serial_ports():
        if port.is_usb:
            ids = f"{port.vid:04X}:{port.pid or 0:04X}"
            bridge = ALLOWED_USB_VIDS.get(port.vid, "unknown")
        else:
            ids = "-"
            bridge = "-"
        table.add_row([port.device, port.description, ids, bridge])
    click.echo(table.get_string())


@cli.command(help="List supported boards")
def boards():
    table = PrettyTable()
    table.field_names = [
        "Key",
        "Name",
        "Chip",
        "Baud rate",
        "Reset",
        "Firmware",
    ]
    table.align = "l"
    for variant in BoardVariant:
        profile = variant.profile
        table.add_row(
            [
                profile.key,
                profile.title,
                profile.chip_family,
                profile.baudrate,
                profile.reset_strategy.value,
                profile.firmware_url.rpartition("/")[2],
            ]
        )
    click.echo(table.get_string())
