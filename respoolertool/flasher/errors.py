#  Copyright (c) LTS Design 2026-10-17.

from typing import Optional


class FlasherError(Exception):
    pass


class NoPortSelected(FlasherError):
    def __init__(self, message: str = "No serial port selected"):
        super().__init__(message)


class LikelyWrongDevice(FlasherError):
    def __init__(self, device: str, vid: int):
        self.device = device
        self.vid = vid
        super().__init__(
            f"No ESP32 detected on {device} "
            f"(USB vendor ID {vid:04X} is not a known ESP32 serial bridge)"
        )


class SyncTimeout(FlasherError, TimeoutError):
    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(
            f"Timeout while connecting to the chip ({timeout:.0f} s). "
            f"Hold the BOOT button while connecting, or check the port and driver."
        )


class UnsupportedChip(FlasherError):
    def __init__(self, chip_name: Optional[str]):
        self.chip_name = chip_name
        super().__init__(
            f"Unsupported chip '{chip_name or 'unknown'}' - "
            f"only ESP32 family boards can be flashed"
        )


class FirmwareDownloadFailed(FlasherError):
    def __init__(self, status: Optional[int], url: str, reason: str = None):
        self.status = status
        self.url = url
        if status is not None:
            message = f"Failed to download firmware: {status}"
        else:
            message = f"Failed to download firmware: network error ({reason})"
        super().__init__(message)


class FlashWriteFailed(FlasherError):
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Writing firmware failed: {detail}")


class ConfigWriteFailed(FlasherError):
    pass


class ResetFailed(FlasherError):
    pass
