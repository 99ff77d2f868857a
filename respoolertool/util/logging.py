#  Copyright (c) LTS Design 2026-10-17.

import logging
import sys
from logging import CRITICAL, DEBUG, ERROR, INFO, LogRecord, StreamHandler, error, log
from time import time

import click

VERBOSE = DEBUG // 2
STREAM = CRITICAL + 1


class LoggingHandler(StreamHandler):
    INSTANCE: "LoggingHandler" = None
    LOG_COLORS = {
        "V": "bright_cyan",
        "D": "bright_blue",
        "I": "bright_green",
        "W": "bright_yellow",
        "E": "bright_red",
        "C": "bright_magenta",
        "S": "bright_magenta",
    }

    @staticmethod
    def get() -> "LoggingHandler":
        if LoggingHandler.INSTANCE:
            return LoggingHandler.INSTANCE
        return LoggingHandler()

    def __init__(
        self,
        timed: bool = False,
        raw: bool = False,
        full_traceback: bool = True,
    ) -> None:
        super().__init__()
        LoggingHandler.INSTANCE = self
        self.time_start = time()
        self.time_prev = self.time_start
        self.timed = timed
        self.raw = raw
        self.full_traceback = full_traceback
        self.attach()
        sys.excepthook = self.excepthook

    @property
    def level(self):
        return logging.root.level

    @level.setter
    def level(self, value: int):
        logging.root.setLevel(value)

    def attach(self):
        logging.addLevelName(VERBOSE, "VERBOSE")
        logging.addLevelName(STREAM, "STREAM")
        logging.captureWarnings(True)
        root = logging.root
        for h in list(root.handlers):
            root.removeHandler(h)
        root.addHandler(self)

    def emit(self, record: LogRecord) -> None:
        message = record.msg
        if message and record.args:
            message = message % record.args
        if record.exc_info:
            _, e, _ = record.exc_info
            if e:
                self.emit_exception(e=e, msg=message)
                return
        self.emit_string(record.levelname[:1], str(message))

    def emit_string(self, log_prefix: str, message: str, color: str = None):
        now = time()
        elapsed_total = now - self.time_start
        elapsed_current = now - self.time_prev

        log_color = color or self.LOG_COLORS.get(log_prefix, "white")

        if self.timed:
            message = f"{log_prefix} [{elapsed_total:11.3f}] (+{elapsed_current:5.3f}s) {message}"
        elif not self.raw:
            message = f"{log_prefix}: {message}"

        file = sys.stderr if log_prefix in "WEC" else sys.stdout
        if file:
            if self.raw:
                click.echo(message, file=file)
            else:
                click.secho(message, file=file, fg=log_color)
        self.time_prev += elapsed_current

    @staticmethod
    def tb_echo(tb):
        filename = tb.tb_frame.f_code.co_filename
        name = tb.tb_frame.f_code.co_name
        line = tb.tb_lineno
        graph(1, f'File "{filename}", line {line}, in {name}', loglevel=ERROR)

    def emit_exception(self, e: BaseException, msg: str = None):
        original_exc = e
        if msg:
            error(msg)
        while e:
            if e == original_exc:
                error(f"{type(e).__name__}: {e}")
            else:
                error(f"Caused by {type(e).__name__}: {e}")
            tb = e.__traceback__
            if tb:
                while tb.tb_next:
                    if self.full_traceback:
                        self.tb_echo(tb)
                    tb = tb.tb_next
                self.tb_echo(tb)
            e = e.__cause__ or e.__context__

    def excepthook(self, *args):
        logging.exception(None, exc_info=args[1])


def log_setup_click_bars():
    # make Click progress bars visible on non-TTY stdout
    if sys.stdout and sys.stdout.isatty():
        return
    # noinspection PyProtectedMember
    from click._termui_impl import ProgressBar

    def render_progress(self: ProgressBar):
        bar = self.format_bar().strip("-")
        if getattr(self, "bar", None) != bar:
            click.echo("#", nl=False)
            self.bar = bar

    def render_finish(_: ProgressBar):
        click.echo("")

    ProgressBar.render_progress = render_progress
    ProgressBar.render_finish = render_finish


def verbose(msg, *args, **kwargs):
    logging.log(VERBOSE, msg, *args, **kwargs)


def stream(msg, *args, **kwargs):
    logging.log(STREAM, msg, *args, **kwargs)


def graph(level: int, *message, loglevel: int = INFO):
    prefix = (level - 1) * "|   " + "|-- " if level else ""
    message = " ".join(str(m) for m in message)
    log(loglevel, f"{prefix}{message}")
