# Copyright (c) LTS Design 2026-10-17.

import os
from logging import DEBUG, INFO, exception

import click
from click import Context
from serial import Serial

from respoolertool.util.cli import get_multi_command_class
from respoolertool.util.logging import VERBOSE, LoggingHandler, log_setup_click_bars
from respoolertool.util.streams import LoggingStreamHook
from respoolertool.version import get_version_full

COMMANDS = {
    # board commands
    "connect": "respoolertool/commands/connect.py",
    "flash": "respoolertool/commands/flash.py",
    "configure": "respoolertool/commands/configure.py",
    "reset": "respoolertool/commands/reset.py",
    # other commands
    "list": "respoolertool/commands/list.py",
    "version": "respoolertool/commands/version.py",
}

VERBOSITY_LEVEL = {
    0: INFO,
    1: DEBUG,
    2: VERBOSE,
}


@click.command(
    cls=get_multi_command_class(COMMANDS),
    help="Firmware flashing tool for LTS Respooler boards",
    context_settings=dict(help_option_names=["-h", "--help"]),
)
@click.option(
    "-v",
    "--verbose",
    help="Output debugging messages (repeat to output more)",
    count=True,
)
@click.option(
    "-T",
    "--traceback",
    help="Print complete exception traceback",
    is_flag=True,
)
@click.option(
    "-t",
    "--timed",
    help="Prepend log lines with timing info",
    is_flag=True,
)
@click.option(
    "-r",
    "--raw-log",
    help="Output logging messages with no additional styling",
    is_flag=True,
)
@click.option(
    "-s",
    "--dump-serial",
    help="Dump transmitted Serial data",
    is_flag=True,
)
@click.version_option(
    get_version_full(),
    "-V",
    "--version",
    message="respoolertool %(version)s",
)
@click.pass_context
def cli_entrypoint(
    ctx: Context,
    verbose: int,
    traceback: bool,
    timed: bool,
    raw_log: bool,
    dump_serial: bool,
):
    ctx.ensure_object(dict)
    if verbose == 0 and "RESPOOLERTOOL_VERBOSE" in os.environ:
        verbose = int(os.environ["RESPOOLERTOOL_VERBOSE"])
    logger = LoggingHandler.get()
    logger.level = VERBOSITY_LEVEL[min(verbose, 2)]
    logger.timed = timed
    logger.raw = raw_log
    logger.full_traceback = traceback
    log_setup_click_bars()
    LoggingStreamHook.set_registered(Serial, dump_serial)


def cli():
    try:
        cli_entrypoint()
    except Exception as e:
        exception(None, exc_info=e)
        exit(1)


if __name__ == "__main__":
    cli()
