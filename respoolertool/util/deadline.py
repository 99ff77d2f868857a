#  Copyright (c) LTS Design 2026-10-17.

from logging import debug
from threading import Thread
from typing import Callable, Generic, Optional, TypeVar

from .logging import verbose

T = TypeVar("T")


class DeadlineThread(Thread, Generic[T]):
    """
    Runs a blocking call in a worker thread so the caller can stop waiting
    for it after a fixed time.
    """

    result: Optional[T] = None
    exc: Optional[BaseException] = None

    def __init__(self, func: Callable[[], T], name: str):
        super().__init__(name=name, daemon=True)
        self.func = func

    def run(self):
        verbose(f"Started {self.name}")
        try:
            self.result = self.func()
        except BaseException as e:
            self.exc = e
        verbose(f"Stopped {self.name}")


def run_with_deadline(
    func: Callable[[], T],
    timeout: float,
    on_expire: Callable[[], None],
    name: str = "deadline",
    join_timeout: float = 2.0,
) -> T:
    """
    Call 'func', giving up after 'timeout' seconds.

    On expiry, 'on_expire' is invoked to release whatever resources 'func'
    is blocked on (typically closing the serial port), then the worker is
    joined for at most 'join_timeout' seconds and TimeoutError is raised.

    :param func: the blocking operation
    :param timeout: time limit in seconds
    :param on_expire: resource cleanup, called exactly once on expiry
    :param name: worker thread name, for logging
    :param join_timeout: how long to wait for the aborted worker to exit
    :return: the value returned by 'func'
    """
    thread = DeadlineThread(func, name)
    thread.start()
    thread.join(timeout)
    if thread.is_alive():
        debug(f"{name} did not finish in {timeout:.1f} s, aborting")
        on_expire()
        thread.join(join_timeout)
        raise TimeoutError(f"{name} did not finish in {timeout:.1f} s")
    if thread.exc is not None:
        raise thread.exc
    return thread.result
