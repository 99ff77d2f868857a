#  Copyright (c) LTS Design 2026-10-17.

from dataclasses import dataclass
from logging import debug, info

from respoolertool.models import CHIP_FAMILY_TOKEN, CHIP_SIBLING_SUFFIXES, BoardVariant
from respoolertool.util.deadline import run_with_deadline
from respoolertool.util.logging import graph
from respoolertool.util.prefs import PREF_BOARD, PreferenceStore

from .errors import SyncTimeout, UnsupportedChip
from .interface import ChipInfo, LoaderFactory
from .port import PortGuard
from .session import Session

# long enough to hold the BOOT button by hand
HANDSHAKE_TIMEOUT = 15.0


@dataclass
class Identification:
    chip_family: str
    variant: BoardVariant


def is_plain_family(chip_name: str) -> bool:
    if chip_name == CHIP_FAMILY_TOKEN:
        return True
    return CHIP_FAMILY_TOKEN in chip_name and not any(
        suffix in chip_name for suffix in CHIP_SIBLING_SUFFIXES
    )


def infer_variant(chip_name: str) -> BoardVariant:
    if is_plain_family(chip_name):
        return BoardVariant.DEVKIT
    return BoardVariant.CONTROL_BOARD_V4


class DeviceIdentifier:
    def __init__(
        self,
        guard: PortGuard,
        loader_factory: LoaderFactory,
        prefs: PreferenceStore,
        timeout: float = HANDSHAKE_TIMEOUT,
    ) -> None:
        self.guard = guard
        self.loader_factory = loader_factory
        self.prefs = prefs
        self.timeout = timeout

    def open_loader(self, session: Session, baudrate: int) -> ChipInfo:
        """
        Bind a fresh loader to the session's port and run its handshake.

        On any failure the whole session (loader and port) is released.
        A handshake which doesn't finish in time is aborted by closing the
        port, and SyncTimeout is raised.
        """
        self.guard.release_loader(session)
        try:
            self.guard.open(session, baudrate)
            session.loader = self.loader_factory(session.port, baudrate)
            graph(0, f"Connecting to the chip on {session.port_name} @ {baudrate}")
            return run_with_deadline(
                session.loader.handshake,
                timeout=self.timeout,
                on_expire=lambda: self.guard.release(session),
                name="Handshake",
            )
        except TimeoutError as e:
            self.guard.release(session)
            raise SyncTimeout(self.timeout) from e
        except Exception:
            self.guard.release(session)
            raise

    def identify(self, session: Session) -> Identification:
        chip = self.open_loader(session, session.variant.profile.baudrate)
        return self.apply_chip(session, chip)

    def apply_chip(self, session: Session, chip: ChipInfo) -> Identification:
        """
        Check a handshake's chip against the supported family, and make the
        session's board (and the stored preference) follow it.
        """
        chip_name = (chip.name or "").upper()
        debug(f"Chip info: {chip}")
        if CHIP_FAMILY_TOKEN not in chip_name:
            self.guard.release(session)
            raise UnsupportedChip(chip.name)

        variant = infer_variant(chip_name)
        session.chip_family = chip_name
        graph(1, f"Detected {chip.description or chip_name} -> {variant.profile.title}")
        if variant != session.variant:
            info(
                f"Switching board from {session.variant.profile.title} "
                f"to {variant.profile.title}"
            )
            session.variant = variant
            self.prefs.set(PREF_BOARD, variant.profile.key)
        return Identification(chip_family=chip_name, variant=variant)
