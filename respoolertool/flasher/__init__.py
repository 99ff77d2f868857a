#  Copyright (c) LTS Design 2026-10-17.

from .classify import DRIVER_HELP, Classification, DriverHelp, ErrorClassifier
from .context import Controls, FlashListener, OrchestratorContext, TerminalResult
from .errors import (
    ConfigWriteFailed,
    FirmwareDownloadFailed,
    FlasherError,
    FlashWriteFailed,
    LikelyWrongDevice,
    NoPortSelected,
    ResetFailed,
    SyncTimeout,
    UnsupportedChip,
)
from .espressif import EsptoolLoader
from .firmware import FirmwareDistribution
from .identify import DeviceIdentifier, Identification, infer_variant
from .interface import ChipInfo, FlashLoader
from .orchestrator import FlashOrchestrator
from .port import PortGuard, open_serial_handle
from .reset import ResetSignaler
from .session import Session
from .transmit import VariantConfigTransmitter, config_payload

__all__ = [
    "ChipInfo",
    "Classification",
    "ConfigWriteFailed",
    "Controls",
    "DRIVER_HELP",
    "DeviceIdentifier",
    "DriverHelp",
    "ErrorClassifier",
    "EsptoolLoader",
    "FirmwareDistribution",
    "FirmwareDownloadFailed",
    "FlashListener",
    "FlashLoader",
    "FlashOrchestrator",
    "FlashWriteFailed",
    "FlasherError",
    "Identification",
    "LikelyWrongDevice",
    "NoPortSelected",
    "OrchestratorContext",
    "PortGuard",
    "ResetFailed",
    "ResetSignaler",
    "Session",
    "SyncTimeout",
    "TerminalResult",
    "UnsupportedChip",
    "VariantConfigTransmitter",
    "config_payload",
    "infer_variant",
    "open_serial_handle",
]
