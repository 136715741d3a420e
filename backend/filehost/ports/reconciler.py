from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from .errors import KillFailedError
from .models import PortConflict, ReconcileOutcome, ReconcileResult, ReconcileState
from .process import find_listening_pid, kill_process

logger = logging.getLogger(__name__)

KILL_PROMPT = "Do you want to kill the process and continue? (y/N): "
_AFFIRMATIVE = {"y", "yes"}


def is_affirmative(answer: Optional[str]) -> bool:
    return (answer or "").strip().lower() in _AFFIRMATIVE


class PortReconciler:
    """
    Clear a port conflict before the server binds.

    The flow moves through ``idle -> prompted -> confirmed/declined ->
    resolved/failed``. Lookup, prompt, kill and sleep are injectable so tests
    can script the operator's answer instead of reading stdin.
    """

    def __init__(
        self,
        *,
        lookup: Callable[[int], Optional[PortConflict]] = find_listening_pid,
        ask: Callable[[str], str] = input,
        kill: Callable[[int], None] = kill_process,
        sleep: Callable[[float], None] = time.sleep,
        notify: Optional[Callable[[str], None]] = None,
        release_delay: float = 1.0,
    ) -> None:
        self._lookup = lookup
        self._ask = ask
        self._kill = kill
        self._sleep = sleep
        self._notify = notify or logger.warning
        self.release_delay = release_delay
        self.state = ReconcileState.idle

    def reconcile(self, port: int) -> ReconcileResult:
        self.state = ReconcileState.idle
        conflict = self._lookup(port)
        if conflict is None:
            self.state = ReconcileState.resolved
            return ReconcileResult(ReconcileOutcome.success, self.state)

        owner = f"{conflict.name} " if conflict.name else ""
        self._notify(f"Port {port} is already in use by process {owner}(PID: {conflict.pid})")

        self.state = ReconcileState.prompted
        try:
            answer = self._ask(KILL_PROMPT)
        except EOFError:
            answer = ""

        if not is_affirmative(answer):
            self.state = ReconcileState.declined
            logger.info("Operator declined to kill PID %s on port %s", conflict.pid, port)
            return self._finish(
                ReconcileOutcome.user_declined,
                ReconcileState.failed,
                conflict,
                "Port conflict - user chose not to kill process",
            )

        self.state = ReconcileState.confirmed
        logger.info("Killing process %s...", conflict.pid)
        try:
            self._kill(conflict.pid)
        except KillFailedError as exc:
            logger.error("Failed to kill process: %s", exc)
            return self._finish(ReconcileOutcome.kill_failed, ReconcileState.failed, conflict, str(exc))

        # Give the OS a moment to release the socket.
        self._sleep(self.release_delay)
        return self._finish(
            ReconcileOutcome.success,
            ReconcileState.resolved,
            conflict,
            f"Process {conflict.pid} killed",
        )

    def _finish(
        self,
        outcome: ReconcileOutcome,
        state: ReconcileState,
        conflict: PortConflict,
        message: str,
    ) -> ReconcileResult:
        self.state = state
        return ReconcileResult(outcome=outcome, state=state, conflict=conflict, message=message)
