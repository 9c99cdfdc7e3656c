"""Authentication module."""

from commission_api.auth.dependencies import (
    get_current_user,
    require_admin,
    require_data_entry,
    require_report_viewer,
    require_roles,
    require_rule_manager,
)
from commission_api.auth.jwt import create_access_token, verify_token
from commission_api.auth.passwords import hash_password, verify_password

__all__ = [
    "create_access_token",
    "verify_token",
    "hash_password",
    "verify_password",
    "get_current_user",
    "require_roles",
    "require_admin",
    "require_rule_manager",
    "require_data_entry",
    "require_report_viewer",
]
