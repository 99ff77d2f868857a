#  Copyright (c) LTS Design 2026-10-17.

from logging import error, info

import click
from click import Context

from respoolertool.commands._utils import DEVICE_HELP, KNOWN_VIDS
from respoolertool.flasher import (
    ResetSignaler,
    VariantConfigTransmitter,
    open_serial_handle,
)
from respoolertool.models import (
    BoardParamType,
    BoardVariant,
    SubVariant,
    SubVariantParamType,
)
from respoolertool.util.cli import DevicePortParamType
from respoolertool.util.logging import graph
from respoolertool.util.prefs import PREF_BOARD, PREF_VARIANT, PreferenceStore


@click.command(short_help="Send the hardware variant to a flashed board")
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
    help="Board type, selects the reset sequence (default: last used)",
    type=BoardParamType(),
)
@click.option(
    "-V",
    "--variant",
    "sub_variant",
    help="Hardware variant: std or pro (default: last used)",
    type=SubVariantParamType(),
)
@click.pass_context
def cli(ctx: Context, device: str, board: BoardVariant, sub_variant: SubVariant):
    """
    Reset the board and send the hardware variant configuration,
    without flashing anything.
    """
    if not device:
        error("No serial port selected")
        ctx.exit(1)
    prefs = PreferenceStore()
    board = board or BoardVariant.from_key(prefs.get(PREF_BOARD))
    board = board or BoardVariant.DEVKIT
    if sub_variant:
        prefs.set(PREF_VARIANT, sub_variant.value)
    else:
        sub_variant = SubVariant.from_key(prefs.get(PREF_VARIANT))
        sub_variant = sub_variant or SubVariant.STANDARD

    strategy = board.profile.reset_strategy
    resetter = ResetSignaler()
    port = open_serial_handle(device)
    graph(0, f"Configuring {board.profile.title} on {device} as {sub_variant.payload}")
    try:
        resetter.reset(port, strategy)
        VariantConfigTransmitter().send(port, sub_variant)
        resetter.reset(port, strategy)
    finally:
        if port.is_open:
            port.close()
    info("Configuration sent")
