#  Copyright (c) LTS Design 2026-10-17.

from logging import error, info
from typing import Optional

from respoolertool.flasher import (
    DriverHelp,
    FlashListener,
    FlashOrchestrator,
    OrchestratorContext,
    TerminalResult,
)
from respoolertool.flasher.identify import HANDSHAKE_TIMEOUT
from respoolertool.flasher.port import PortSelector
from respoolertool.models import ALLOWED_USB_VIDS, FlashState
from respoolertool.util.flash import ProgressState, format_guide
from respoolertool.util.logging import LoggingHandler, graph
from respoolertool.util.misc import find_port_info
from respoolertool.util.streams import ClickProgressCallback


class ClickFlashListener(FlashListener):
    """Renders orchestrator events as log lines and a click progress bar."""

    bar: Optional[ClickProgressCallback] = None
    label: Optional[str] = None

    def on_state(self, state: FlashState) -> None:
        if state == FlashState.FLASHING:
            self.bar = ClickProgressCallback()
            self.label = None
        elif self.bar:
            self.bar.finish()
            self.bar = None

    def on_progress(self, progress: ProgressState) -> None:
        if progress.is_error:
            # reported by on_terminal()
            return
        if self.bar:
            if progress.label != self.label:
                self.bar.on_message(progress.label)
            self.bar.on_percent(progress.percent)
        elif progress.label != self.label:
            graph(0, progress.label)
        self.label = progress.label

    def on_terminal(self, result: TerminalResult) -> None:
        if result.success:
            info(result.label)
        else:
            error(f"{result.label} {result.detail}")

    def on_driver_help(self, driver_help: DriverHelp) -> None:
        logger = LoggingHandler.get()
        logger.emit_string("W", driver_help.title, color="bright_yellow")
        for line in format_guide(driver_help.guide()):
            logger.emit_string("I", line, color="bright_blue")


def port_selector(device: Optional[str]) -> PortSelector:
    def select():
        if not device:
            return None
        return find_port_info(device)

    return select


def make_orchestrator(timeout: Optional[float]) -> FlashOrchestrator:
    context = OrchestratorContext(listener=ClickFlashListener())
    return FlashOrchestrator(
        context=context,
        handshake_timeout=timeout or HANDSHAKE_TIMEOUT,
    )


DEVICE_HELP = "Target device port (default: auto detect)"
TIMEOUT_HELP = f"Chip connection timeout in seconds (default: {HANDSHAKE_TIMEOUT})"
KNOWN_VIDS = tuple(ALLOWED_USB_VIDS)
