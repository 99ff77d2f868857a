#  Copyright (c) LTS Design 2026-10-17.

from dataclasses import dataclass
from threading import Timer
from time import sleep as time_sleep
from typing import Callable, Optional

from respoolertool.models import FlashState
from respoolertool.util.flash import ProgressState
from respoolertool.util.prefs import PreferenceStore

from .classify import DriverHelp

Scheduler = Callable[[float, Callable[[], None]], None]


@dataclass(frozen=True)
class Controls:
    connect: bool = True
    flash: bool = False
    variant: bool = True


@dataclass(frozen=True)
class TerminalResult:
    success: bool
    label: str
    detail: Optional[str] = None


class FlashListener:
    """Presentation-side observer of the orchestrator. All methods are optional."""

    def on_state(self, state: FlashState) -> None:
        pass

    def on_progress(self, progress: ProgressState) -> None:
        pass

    def on_controls(self, controls: Controls) -> None:
        pass

    def on_terminal(self, result: TerminalResult) -> None:
        pass

    def on_driver_help(self, driver_help: DriverHelp) -> None:
        pass


def schedule_timer(delay: float, func: Callable[[], None]) -> None:
    timer = Timer(delay, func)
    timer.daemon = True
    timer.start()


class OrchestratorContext:
    """
    State living for the whole process, shared by all sessions.
    """

    help_shown: bool

    def __init__(
        self,
        prefs: PreferenceStore = None,
        listener: FlashListener = None,
        sleep: Callable[[float], None] = time_sleep,
        schedule: Scheduler = schedule_timer,
    ) -> None:
        self.prefs = prefs or PreferenceStore()
        self.listener = listener or FlashListener()
        self.sleep = sleep
        self.schedule = schedule
        self.help_shown = False
