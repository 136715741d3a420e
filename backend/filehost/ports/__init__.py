from .errors import BindError, KillFailedError, PortError, PortInUseError
from .models import PortConflict, ReconcileOutcome, ReconcileResult, ReconcileState
from .process import bind_socket, find_listening_pid, kill_process
from .reconciler import KILL_PROMPT, PortReconciler, is_affirmative

__all__ = [
    "BindError",
    "KILL_PROMPT",
    "KillFailedError",
    "PortConflict",
    "PortError",
    "PortInUseError",
    "PortReconciler",
    "ReconcileOutcome",
    "ReconcileResult",
    "ReconcileState",
    "bind_socket",
    "find_listening_pid",
    "is_affirmative",
    "kill_process",
]
