#  Copyright (c) LTS Design 2026-10-17.

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
from respoolertool.models import (
    BoardParamType,
    BoardVariant,
    SubVariant,
    SubVariantParamType,
)
from respoolertool.util.cli import DevicePortParamType
from respoolertool.util.logging import graph


@click.command(short_help="Flash the latest firmware")
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
    help="Board to assume before detection: dev or v4 (default: last used)",
    type=BoardParamType(),
)
@click.option(
    "-V",
    "--variant",
    "sub_variant",
    help="Hardware variant written after flashing: std or pro (default: last used)",
    type=SubVariantParamType(),
)
@click.option(
    "-t",
    "--timeout",
    help=TIMEOUT_HELP,
    type=float,
    default=None,
)
@click.pass_context
def cli(
    ctx: Context,
    device: str,
    board: BoardVariant,
    sub_variant: SubVariant,
    timeout: float,
):
    """
    Download the latest firmware for the connected board and flash it.

    The board (-b) is only a starting point: the chip is identified
    and the matching firmware is chosen automatically. After flashing,
    the board is reset and the hardware variant (-V) is sent to it.

    Both choices are remembered for the next run.
    """
    time_start = time()
    orchestrator = make_orchestrator(timeout)
    if board:
        orchestrator.select_variant(board)
    if sub_variant:
        orchestrator.select_sub_variant(sub_variant)

    if not orchestrator.connect(port_selector(device)):
        ctx.exit(1)
    if not orchestrator.flash():
        ctx.exit(1)

    duration = time() - time_start
    graph(1, f"Finished in {duration:.3f} s")
