#  Copyright (c) LTS Design 2026-10-17.

from logging import info
from time import time

import click
from click import Context

from respoolertool.commands._utils import (
    DEVICE_HELP,
    KNOWN_VIDS,
    TIMEOUT_HELP,
    make_orchestrator,
    port_selector,
)
from respoolertool.models import BoardParamType, BoardVariant
from respoolertool.util.cli import DevicePortParamType
from respoolertool.util.logging import graph


@click.command(short_help="Detect the connected board")
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
    help="Board to assume before detection (default: last used)",
    type=BoardParamType(),
)
@click.option(
    "-t",
    "--timeout",
    help=TIMEOUT_HELP,
    type=float,
    default=None,
)
@click.pass_context
def cli(ctx: Context, device: str, board: BoardVariant, timeout: float):
    """
    Connect to the board, identify its chip and remember the detected board.

    When not specified (-d), a port with a known ESP32 USB-serial bridge
    is preferred.
    """
    time_start = time()
    orchestrator = make_orchestrator(timeout)
    if board:
        orchestrator.select_variant(board)

    if not orchestrator.connect(port_selector(device)):
        ctx.exit(1)

    session = orchestrator.session
    graph(1, f"Chip family: {session.chip_family}")
    graph(1, f"Board: {session.variant.profile.title}")
    graph(1, f"Variant: {session.sub_variant.payload}")
    orchestrator.disconnect()

    duration = time() - time_start
    info(f"Finished in {duration:.3f} s")
