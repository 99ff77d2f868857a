#  Copyright (c) LTS Design 2026-10-17.

from logging import info

import click

from respoolertool.flasher import FirmwareDistribution
from respoolertool.version import get_version_full


@click.command(help="Show the tool and latest firmware versions")
def cli():
    info(f"respoolertool {get_version_full()}")
    latest = FirmwareDistribution().fetch_latest_version()
    info(f"Latest board firmware: {latest}")
