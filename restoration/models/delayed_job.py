"""
Progress record for long-running background work.

A job is created pending when work is enqueued, moves to running once the
worker knows how much content it has to process, and ends in exactly one
terminal state. Terminal jobs are never modified again.
"""
import logging

from django.db import models

from restoration.constants.validation_types import JobStatus
from restoration.models.basemodel import BaseModel, generate_uuid

logger = logging.getLogger(__name__)


class DelayedJob(BaseModel):
    uuid = models.CharField(max_length=36, unique=True, default=generate_uuid, editable=False)
    name = models.CharField(max_length=255, null=True, blank=True)

    status = models.CharField(max_length=20, choices=JobStatus.CHOICES, default=JobStatus.PENDING, db_index=True)
    status_code = models.PositiveSmallIntegerField(null=True, blank=True)

    total_content = models.PositiveIntegerField(null=True, blank=True)
    processed_content = models.PositiveIntegerField(null=True, blank=True)
    progress_message = models.CharField(max_length=500, null=True, blank=True)
    payload = models.JSONField(null=True, blank=True)

    # What the job is about, e.g. {"entity_type": "site", "entity_uuid": ..., "entity_name": ...}
    metadata = models.JSONField(default=dict, blank=True)
    is_acknowledged = models.BooleanField(default=False)

    class Meta:
        db_table = 'restoration_delayed_jobs'
        ordering = ['-created_at']

    def __str__(self):
        return f"DelayedJob {self.id} {self.name or ''} ({self.status})"

    @property
    def is_terminal(self):
        return self.status in JobStatus.terminal()

    def _ensure_not_terminal(self):
        if self.is_terminal:
            raise ValueError(f"Delayed job {self.id} is already {self.status}")

    def update_progress(self, total_content=None, processed_content=None, progress_message=None):
        """Record progress; the first progress update moves a pending job to running."""
        self._ensure_not_terminal()
        if total_content is not None:
            self.total_content = total_content
        if processed_content is not None:
            self.processed_content = processed_content
        if progress_message is not None:
            self.progress_message = progress_message
        self.status = JobStatus.RUNNING
        self.save(update_fields=['total_content', 'processed_content', 'progress_message', 'status', 'updated_at'])

    def mark_succeeded(self, payload=None, status_code=200):
        self._ensure_not_terminal()
        self.status = JobStatus.SUCCEEDED
        self.status_code = status_code
        self.payload = payload
        self.save(update_fields=['status', 'status_code', 'payload', 'updated_at'])

    def mark_failed(self, status_code, message):
        self._ensure_not_terminal()
        self.status = JobStatus.FAILED
        self.status_code = status_code
        self.payload = {'message': message}
        self.save(update_fields=['status', 'status_code', 'payload', 'updated_at'])
        logger.error(f"Delayed job {self.id} failed ({status_code}): {message}")

    def to_dict(self):
        return {
            'id': self.id,
            'uuid': self.uuid,
            'name': self.name,
            'status': self.status,
            'statusCode': self.status_code,
            'totalContent': self.total_content,
            'processedContent': self.processed_content,
            'progressMessage': self.progress_message,
            'payload': self.payload,
            'metadata': self.metadata,
        }
