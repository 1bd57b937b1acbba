"""
Submission coordinator for the shipping address step.

Runs at most one address update at a time on a worker owned by the
coordinator, then routes the outcome: failures go to the feedback sink,
success goes to the navigation sink.
"""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor, wait as wait_futures
from enum import Enum
from typing import Any, Callable

from src.domains.checkout.address import ShippingAddress
from src.domains.checkout.outcome import UpdateResult
from src.utils.logger import get_logger

logger = get_logger()

NEXT_STEP_PATH = "/payment-method"
DESTRUCTIVE = "destructive"

UpdateAddress = Callable[[ShippingAddress], UpdateResult]
Notify = Callable[[str, str], None]
GoTo = Callable[[str], None]


class SubmissionState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    NAVIGATED = "navigated"


class SubmissionCoordinator:
    """
    Idle -> Pending -> (Idle | Navigated).

    `pending` stays true after navigation; the page drops the coordinator
    instead of resetting it.
    """

    def __init__(
        self,
        update_address: UpdateAddress,
        notify: Notify,
        go_to: GoTo,
    ) -> None:
        self._update_address = update_address
        self._notify = notify
        self._go_to = go_to
        self._state = SubmissionState.IDLE
        self._executor: ThreadPoolExecutor | None = None
        self._future: Future[UpdateResult] | None = None

    def __getstate__(self) -> dict[str, Any]:
        """Custom serialization - the worker and any in-flight call are not kept."""
        state = self._state
        if state is SubmissionState.PENDING:
            state = SubmissionState.IDLE
        return {
            "_update_address": self._update_address,
            "_notify": self._notify,
            "_go_to": self._go_to,
            "_state": state,
        }

    def __setstate__(self, state: dict[str, Any]) -> None:
        self._update_address = state["_update_address"]
        self._notify = state["_notify"]
        self._go_to = state["_go_to"]
        self._state = state.get("_state", SubmissionState.IDLE)
        self._executor = None  # Will be recreated on demand
        self._future = None

    @property
    def state(self) -> SubmissionState:
        return self._state

    @property
    def pending(self) -> bool:
        return self._state is not SubmissionState.IDLE

    def _ensure_executor(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=1,
                thread_name_prefix="address-update",
            )
        return self._executor

    def submit(self, address: ShippingAddress) -> bool:
        """
        Start the remote update for an already validated address.

        Returns False without calling anything when a submission is in flight
        (or has already navigated away).
        """
        if self.pending:
            logger.debug("Ignoring submit while %s", self._state.value)
            return False
        self._state = SubmissionState.PENDING
        self._future = self._ensure_executor().submit(self._update_address, address)
        logger.info("Address update submitted")
        return True

    def poll(self) -> SubmissionState:
        """Apply the outcome if the update has finished; never blocks."""
        if self._state is not SubmissionState.PENDING or self._future is None:
            return self._state
        if not self._future.done():
            return self._state
        return self._settle()

    def wait(self, timeout: float | None = None) -> SubmissionState:
        """Block until the in-flight update finishes (or timeout), then poll."""
        if self._state is SubmissionState.PENDING and self._future is not None:
            wait_futures([self._future], timeout=timeout)
        return self.poll()

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None

    def _settle(self) -> SubmissionState:
        future, self._future = self._future, None
        try:
            result = future.result()
        except Exception as e:
            logger.exception("Address update raised instead of returning a result: %s", e)
            self._state = SubmissionState.IDLE
            raise

        if not result.success:
            logger.info("Address update failed: %s", result.message)
            self._state = SubmissionState.IDLE
            self._notify(result.display_message, DESTRUCTIVE)
            return self._state

        logger.info("Address saved; moving to %s", NEXT_STEP_PATH)
        self._state = SubmissionState.NAVIGATED
        self.close()
        self._go_to(NEXT_STEP_PATH)
        return self._state
