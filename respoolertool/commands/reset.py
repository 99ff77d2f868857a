#  Copyright (c) LTS Design 2026-10-17.

from logging import error, info

import click
from click import Context

from respoolertool.commands._utils import DEVICE_HELP, KNOWN_VIDS
from respoolertool.flasher import ResetSignaler, open_serial_handle
from respoolertool.models import BoardParamType, BoardVariant
from respoolertool.util.cli import DevicePortParamType


@click.command(short_help="Reset the board")
@click.option(
    "-d",
    "--device",
    help=DEVICE_HELP,
    type=DevicePortParamType(KNOWN_VIDS),
    default=(),
)
@click.option(
    "-b",
    "--board",
    help="Board type, selects the reset sequence (default: try all)",
    type=BoardParamType(),
)
@click.pass_context
def cli(ctx: Context, device: str, board: BoardVariant):
    """
    Reset the board through the serial control lines.

    Without -b/--board, the EN-only sequence is tried first,
    then the DTR/RTS sequence.
    """
    if not device:
        error("No serial port selected")
        ctx.exit(1)
    strategy = board.profile.reset_strategy if board else None
    port = open_serial_handle(device)
    try:
        done = ResetSignaler().reset(port, strategy)
    finally:
        if port.is_open:
            port.close()
    if not done:
        error(f"Couldn't reset the board on {device}")
        ctx.exit(1)
    info(f"Board on {device} was reset")
