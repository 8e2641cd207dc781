"""Inquiry Rules - status-transition side effects applied during updates.

Invariants:
    - resolved_at is stamped only on a transition INTO resolved
    - resolved_at is never cleared when status moves away from resolved
    - Caller-supplied resolved_at is always discarded
"""

from datetime import datetime
from typing import Any

from inquiry_api.core.domain_types import InquiryStatus

SYSTEM_MANAGED_FIELDS = frozenset({
    "id", "resolved_at", "created_at", "updated_at", "deleted_at",
})


def is_resolution_transition(old_status: str, new_status: str | None) -> bool:
    resolved = InquiryStatus.RESOLVED.value
    return new_status == resolved and old_status != resolved


def apply_status_transition(
    old_status: str, changes: dict[str, Any], now: datetime,
) -> dict[str, Any]:
    """Return the final column changes for an update. Pure, no IO."""
    final = {
        key: value for key, value in changes.items()
        if key not in SYSTEM_MANAGED_FIELDS
    }
    if is_resolution_transition(old_status, final.get("status")):
        final["resolved_at"] = now
    return final
