"""Asynchronous audit tasks."""

import structlog
from celery import shared_task

from modules.audit.repositories.django_repository import AuditLogDjangoRepository

logger = structlog.get_logger(__name__)


@shared_task(name="audit.record_action")
def record_action(employee_id, action, payload):
    """Persist one audit log entry; returns its ID."""
    entry = AuditLogDjangoRepository().record(employee_id, action, payload or {})
    logger.info("audit.recorded", action=action, audit_id=str(entry.id))
    return str(entry.id)
