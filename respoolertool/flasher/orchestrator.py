#  Copyright (c) LTS Design 2026-10-17.

from dataclasses import replace
from logging import debug, exception, info, warning
from typing import Optional

from respoolertool.models import ALLOWED_USB_VIDS, BoardVariant, FlashState, SubVariant
from respoolertool.util.flash import ProgressState, percent_of
from respoolertool.util.misc import SerialPortInfo
from respoolertool.util.prefs import PREF_BOARD, PREF_VARIANT

from .classify import ErrorClassifier
from .context import Controls, OrchestratorContext, TerminalResult
from .errors import (
    FirmwareDownloadFailed,
    FlasherError,
    FlashWriteFailed,
    LikelyWrongDevice,
    NoPortSelected,
)
from .espressif import EsptoolLoader
from .firmware import FirmwareDistribution
from .identify import HANDSHAKE_TIMEOUT, DeviceIdentifier
from .interface import LoaderFactory
from .port import PortGuard, PortSelector
from .reset import ResetSignaler
from .session import Session
from .transmit import VariantConfigTransmitter

FLASH_ADDRESS = 0x0
FLASH_SIZE = "4MB"

POST_FLASH_DELAY = 0.500
POST_RESET_DELAY = 0.500
POST_CONFIG_DELAY = 0.150
READY_REVERT_DELAY = 5.0

LABEL_READY = "Ready for connection"
LABEL_CHOOSE_PORT = "Please choose a serial port"
LABEL_DETECTING = "Detecting board…"
LABEL_CONNECTED = "Connected successfully! ({board})"
LABEL_CONNECT_FAILED = "Failed to connect!"
LABEL_NOT_CONNECTED = "Please connect the board first"
LABEL_INITIALIZING = "Initializing, please wait..."
LABEL_FLASHING = "Flashing firmware..."
LABEL_CONFIGURING = "Applying configuration…"
LABEL_SETTLED = "Flashed successfully!"
LABEL_DOWNLOAD_FAILED = "Failed to download firmware!"
LABEL_FLASH_FAILED = "Flash failed!"


class FlashOrchestrator:
    """
    Drives a board from port selection through identification and flashing
    to the post-flash configuration.

    Operations are blocking and sequential; re-entering one while its
    control is disabled is ignored. Every failure path leaves the port
    closed and the loader dropped, so connect() can always be retried.
    """

    session: Optional[Session] = None
    state: FlashState = FlashState.IDLE
    controls: Controls
    last_error: Optional[str] = None

    def __init__(
        self,
        context: OrchestratorContext,
        loader_factory: LoaderFactory = EsptoolLoader,
        firmware: FirmwareDistribution = None,
        guard: PortGuard = None,
        resetter: ResetSignaler = None,
        transmitter: VariantConfigTransmitter = None,
        classifier: ErrorClassifier = None,
        handshake_timeout: float = HANDSHAKE_TIMEOUT,
    ) -> None:
        self.context = context
        self.guard = guard or PortGuard()
        self.identifier = DeviceIdentifier(
            guard=self.guard,
            loader_factory=loader_factory,
            prefs=context.prefs,
            timeout=handshake_timeout,
        )
        self.firmware = firmware or FirmwareDistribution()
        self.resetter = resetter or ResetSignaler(context.sleep)
        self.transmitter = transmitter or VariantConfigTransmitter(context.sleep)
        self.classifier = classifier or ErrorClassifier()
        self.controls = Controls()

        prefs = context.prefs
        self.variant = BoardVariant.from_key(prefs.get(PREF_BOARD))
        self.variant = self.variant or BoardVariant.DEVKIT
        self.sub_variant = SubVariant.from_key(prefs.get(PREF_VARIANT))
        self.sub_variant = self.sub_variant or SubVariant.STANDARD

    @property
    def listener(self):
        return self.context.listener

    def _set_state(self, state: FlashState) -> None:
        if state == self.state:
            return
        debug(f"State: {self.state.name} -> {state.name}")
        self.state = state
        self.listener.on_state(state)

    def _set_controls(self, **enabled: bool) -> None:
        self.controls = replace(self.controls, **enabled)
        self.listener.on_controls(self.controls)

    def _progress(self, percent: int, label: str, is_error: bool = False) -> None:
        self.listener.on_progress(ProgressState(percent, label, is_error))

    def _teardown(self) -> None:
        self.guard.release(self.session)
        self.session = None

    def _fail(self, e: Exception, label: str) -> None:
        detail = str(e) or type(e).__name__
        if isinstance(e, FlasherError):
            warning(f"{label} {detail}")
        else:
            exception(label, exc_info=e)
        self.last_error = detail
        self._teardown()
        self._set_state(FlashState.FAILED)
        self._progress(0, label, is_error=True)
        self.classifier.report(detail, self.context)
        self.listener.on_terminal(TerminalResult(False, label, detail))

    @staticmethod
    def check_vendor(port_info: SerialPortInfo) -> None:
        # adapters which don't report a VID can't be judged
        if port_info.vid is None:
            return
        if port_info.vid not in ALLOWED_USB_VIDS:
            raise LikelyWrongDevice(port_info.device, port_info.vid)

    def select_variant(self, variant: BoardVariant) -> None:
        if not self.controls.variant:
            warning("Board selection is locked while flashing")
            return
        self.variant = variant
        if self.session:
            self.session.variant = variant
        self.context.prefs.set(PREF_BOARD, variant.profile.key)

    def select_sub_variant(self, sub_variant: SubVariant) -> None:
        if not self.controls.variant:
            warning("Variant selection is locked while flashing")
            return
        self.sub_variant = sub_variant
        if self.session:
            self.session.sub_variant = sub_variant
        self.context.prefs.set(PREF_VARIANT, sub_variant.value)

    def connect(self, selector: PortSelector) -> bool:
        if not self.controls.connect:
            warning("Already connecting or flashing, please wait")
            return False
        self._teardown()
        self._set_controls(connect=False, flash=False)

        try:
            port_info, port = self.guard.acquire(selector)
        except NoPortSelected as e:
            info(str(e))
            self._set_state(FlashState.IDLE)
            self._progress(0, LABEL_CHOOSE_PORT)
            self._set_controls(connect=True)
            return False

        self.session = Session(
            port=port,
            port_info=port_info,
            variant=self.variant,
            sub_variant=self.sub_variant,
        )
        self._set_state(FlashState.PORT_CHOSEN)

        try:
            self.check_vendor(port_info)
            self._set_state(FlashState.IDENTIFYING)
            self._progress(0, LABEL_DETECTING)
            identification = self.identifier.identify(self.session)
        except Exception as e:
            self._fail(e, LABEL_CONNECT_FAILED)
            self._set_controls(connect=True, flash=False)
            return False

        self.variant = identification.variant
        self.guard.release_loader(self.session)
        self.last_error = None
        self._set_state(FlashState.CONNECTED)
        self._progress(0, LABEL_CONNECTED.format(board=self.variant.profile.title))
        self._set_controls(connect=True, flash=True)
        return True

    def flash(self) -> bool:
        session = self.session
        if session is None or session.port is None:
            self._progress(0, LABEL_NOT_CONNECTED)
            self._set_controls(flash=False)
            return False
        if not self.controls.flash:
            warning("Flashing is not possible right now")
            return False
        # the only port reference used until the session is destroyed
        port = session.port

        self._set_controls(connect=False, flash=False, variant=False)
        self._set_state(FlashState.FLASHING)
        self._progress(0, LABEL_INITIALIZING)
        try:
            chip = self.identifier.open_loader(session, session.variant.profile.baudrate)
            # the image must match the chip on the port now, not the one seen at connect
            self.variant = self.identifier.apply_chip(session, chip).variant
            profile = session.variant.profile
            data = self.firmware.fetch_image(session.variant)
            self._write_image(session, data)

            self._set_state(FlashState.POST_CONFIGURING)
            self.guard.release_transport(session)
            self.context.sleep(POST_FLASH_DELAY)
            self._progress(100, LABEL_CONFIGURING)
            self.resetter.reset(port, profile.reset_strategy)
            self.context.sleep(POST_RESET_DELAY)
            self.transmitter.send(port, session.sub_variant)
            self.context.sleep(POST_CONFIG_DELAY)
            self.resetter.reset(port, profile.reset_strategy)
        except Exception as e:
            if isinstance(e, FirmwareDownloadFailed):
                self._fail(e, LABEL_DOWNLOAD_FAILED)
            else:
                self._fail(e, LABEL_FLASH_FAILED)
            return False
        finally:
            self._teardown()
            self._set_controls(connect=True, flash=False, variant=True)

        self._settle()
        return True

    def _write_image(self, session: Session, data: bytes) -> None:
        def on_progress(written: int, total: int) -> None:
            self._progress(percent_of(written, total), LABEL_FLASHING)

        try:
            session.loader.write_image(
                address=FLASH_ADDRESS,
                data=data,
                on_progress=on_progress,
                erase_all=False,
                compress=True,
                flash_mode="keep",
                flash_freq="keep",
                flash_size=FLASH_SIZE,
            )
        except FlasherError:
            raise
        except Exception as e:
            raise FlashWriteFailed(str(e) or type(e).__name__) from e

    def _settle(self) -> None:
        self._set_state(FlashState.SETTLED)
        self._progress(100, LABEL_SETTLED)
        self.listener.on_terminal(TerminalResult(True, LABEL_SETTLED))
        self.context.schedule(
            READY_REVERT_DELAY,
            lambda: self._progress(0, LABEL_READY),
        )

    def disconnect(self) -> None:
        if self.session is None:
            return
        info(f"Disconnecting from {self.session.port_name}")
        self._teardown()
        self._set_state(FlashState.IDLE)
        self._progress(0, LABEL_READY)
        self._set_controls(connect=True, flash=False, variant=True)

    def show_more_info(self) -> Optional[str]:
        self.classifier.show_help(self.context)
        return self.last_error
