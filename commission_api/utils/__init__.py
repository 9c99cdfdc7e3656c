"""Utility functions."""

from commission_api.utils.audit import get_client_ip, jsonable_changes, log_action

__all__ = [
    "log_action",
    "get_client_ip",
    "jsonable_changes",
]
