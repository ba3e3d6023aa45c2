"""Fire-and-forget audit recording.

``AuditTrail.record`` hands the entry to a Celery task and returns
immediately.  Recording is bookkeeping: a broker outage or a failing task
is logged and never propagates to the business operation that triggered
it.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

import structlog

from modules.audit.tasks import record_action

logger = structlog.get_logger(__name__)


class AuditTrail:
    def __init__(self, task=record_action) -> None:
        self._task = task

    def record(
        self, actor_id: Optional[str], action: str, payload: Dict[str, Any]
    ) -> None:
        # Celery uses the JSON serializer; UUIDs/datetimes become strings.
        safe_payload = json.loads(json.dumps(payload, default=str))
        try:
            self._task.delay(actor_id, action, safe_payload)
        except Exception:
            logger.exception("audit.record_failed", action=action, actor_id=actor_id)
