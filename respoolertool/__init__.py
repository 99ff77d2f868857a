# Copyright (c) LTS Design 2026-10-17.

from . import util
from .flasher import FlashListener, FlashOrchestrator, OrchestratorContext
from .models import BoardVariant, SubVariant
from .version import get_version

__all__ = [
    "BoardVariant",
    "FlashListener",
    "FlashOrchestrator",
    "OrchestratorContext",
    "SubVariant",
    "cli",
    "get_version",
    "util",
]


def cli():
    from .__main__ import cli

    cli()
