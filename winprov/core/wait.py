# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
"""
Bounded polling wait.

A wait that runs out of budget raises WaitTimeout; callers decide whether
that is fatal (the CLI treats it as fatal, exit code 124).
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional, TypeVar

from .exceptions import WaitTimeout

T = TypeVar("T")

DEFAULT_TIMEOUT_S = 30.0
DEFAULT_INTERVAL_S = 1.0


def wait_until(
    poll: Callable[[], T],
    accept: Callable[[T], bool],
    *,
    timeout_s: float = DEFAULT_TIMEOUT_S,
    interval_s: float = DEFAULT_INTERVAL_S,
    what: str = "condition",
    logger: Optional[logging.Logger] = None,
    clock: Optional[Callable[[], float]] = None,
    sleep: Optional[Callable[[float], None]] = None,
) -> T:
    """
    Call `poll()` until `accept(value)` is true or `timeout_s` elapses.

    The poll always runs at least once, so a zero budget still checks the
    current state. Exceptions raised by `poll` propagate unchanged.

    Args:
        poll: returns the observed value (e.g. a service state)
        accept: predicate over the observed value
        timeout_s: total budget in seconds
        interval_s: pause between polls
        what: description used in logs and the timeout message
        logger: optional logger for per-attempt debug lines
        clock/sleep: default to time.monotonic / time.sleep

    Returns:
        The first accepted value.

    Raises:
        WaitTimeout: the budget ran out; the last observed value is in its context.
    """
    clock = clock or time.monotonic
    sleep = sleep or time.sleep
    deadline = clock() + max(0.0, float(timeout_s))
    attempt = 0

    while True:
        attempt += 1
        value = poll()
        if accept(value):
            if logger:
                logger.debug("%s reached after %d attempt(s)", what, attempt)
            return value

        remaining = deadline - clock()
        if logger:
            logger.debug("Waiting for %s (attempt %d, last=%r, %.1fs left)", what, attempt, value, max(0.0, remaining))
        if remaining <= 0:
            raise WaitTimeout(
                code=124,
                msg=f"Timed out after {timeout_s:g}s waiting for {what}",
                context={"last": value, "attempts": attempt},
            )
        sleep(min(float(interval_s), remaining))
