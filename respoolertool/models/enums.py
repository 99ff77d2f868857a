#  Copyright (c) LTS Design 2026-10-17.

from enum import Enum, auto


class FlashState(Enum):
    IDLE = auto()
    PORT_CHOSEN = auto()
    IDENTIFYING = auto()
    CONNECTED = auto()
    FLASHING = auto()
    POST_CONFIGURING = auto()
    SETTLED = auto()
    FAILED = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (FlashState.IDLE, FlashState.SETTLED, FlashState.FAILED)


class ResetStrategy(Enum):
    # toggles CHIP_EN only; BOOT strap is not wired to the host
    EN_ONLY = "en-only"
    # toggles both lines, for auto-reset circuits on native USB boards
    DTR_RTS = "dtr-rts"
