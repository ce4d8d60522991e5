"""Per-request context shared by the HTTP layer and the log patcher."""

from contextvars import ContextVar

# ---------------------------------------------------------------------------
# Context variable: task-safe request state
# ---------------------------------------------------------------------------

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


def get_request_id() -> str:
    """Return the id of the request being handled, or "-" outside one."""
    return request_id_var.get()
