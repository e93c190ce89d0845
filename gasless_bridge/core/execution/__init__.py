"""Sponsored execution submission and status polling."""

from .models import ExecuteResponse, ExecutionRequest, RelayStatus, StatusSnapshot
from .poller import StatusPoller
from .submitter import ExecutionSubmitter

__all__ = [
    "ExecuteResponse",
    "ExecutionRequest",
    "ExecutionSubmitter",
    "RelayStatus",
    "StatusPoller",
    "StatusSnapshot",
]
