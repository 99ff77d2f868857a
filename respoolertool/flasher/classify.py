#  Copyright (c) LTS Design 2026-10-17.

from dataclasses import dataclass, field
from logging import debug
from typing import TYPE_CHECKING, List, Tuple, Union

if TYPE_CHECKING:
    from .context import OrchestratorContext

# lower-case fragments of messages caused by a wrong port or a missing driver
DRIVER_ISSUE_PATTERNS = (
    "timeout",
    "timed out",
    "not detected",
    "nicht erkannt",
    "no esp32 detected",
    "failed to open",
    "could not open port",
    "no serial",
    "permission",
    "access is denied",
    "network",
)


@dataclass(frozen=True)
class Classification:
    is_likely_port_or_driver_issue: bool


@dataclass(frozen=True)
class DriverHelp:
    title: str
    body: str
    port_examples: List[str] = field(default_factory=list)
    driver_links: List[Tuple[str, str]] = field(default_factory=list)
    hint: str = ""

    def guide(self) -> List[Union[str, list]]:
        return [
            self.body,
            "Typical port names: " + ", ".join(self.port_examples),
            [("Driver", "Download"), *self.driver_links],
            self.hint,
        ]


DRIVER_HELP = DriverHelp(
    title="Board not found?",
    body=(
        "The board did not answer on the selected port. Either a different\n"
        "serial device was chosen, or the USB-serial driver is missing."
    ),
    port_examples=[
        "COM3",
        "/dev/ttyUSB0",
        "/dev/ttyACM0",
        "/dev/cu.usbserial-0001",
        "/dev/cu.SLAB_USBtoUART",
    ],
    driver_links=[
        (
            "Silicon Labs CP210x",
            "https://www.silabs.com/developers/usb-to-uart-bridge-vcp-drivers",
        ),
        ("WCH CH340/CH341", "https://www.wch-ic.com/downloads/CH341SER_EXE.html"),
    ],
    hint=(
        "Unplug the board, list the ports, plug it back in - the port that\n"
        "appears is the right one. Use a USB cable which carries data."
    ),
)


class ErrorClassifier:
    def __init__(self, patterns: Tuple[str, ...] = DRIVER_ISSUE_PATTERNS) -> None:
        self.patterns = patterns

    def classify(self, message: str) -> Classification:
        message = (message or "").lower()
        return Classification(
            is_likely_port_or_driver_issue=any(p in message for p in self.patterns),
        )

    def report(self, message: str, context: "OrchestratorContext") -> Classification:
        """
        Classify a failure and show the driver help if it's the first
        port/driver issue of this process.
        """
        result = self.classify(message)
        if not result.is_likely_port_or_driver_issue:
            return result
        if context.help_shown:
            debug("Driver help was already shown, not repeating")
            return result
        self.show_help(context)
        return result

    @staticmethod
    def show_help(context: "OrchestratorContext") -> None:
        context.help_shown = True
        context.listener.on_driver_help(DRIVER_HELP)
