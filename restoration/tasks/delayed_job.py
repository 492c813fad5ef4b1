"""
Generic processing of DelayedJob-backed background work.

A DelayedJobWorker loads the job named in the task payload, runs
process_delayed_job() and records the outcome on the job. It is the only
place where exceptions are turned into data: a DelayedJobException keeps
its status code, anything else becomes a 500, and the message is stored
in the job payload.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from restoration.models import DelayedJob

logger = logging.getLogger(__name__)


class DelayedJobException(Exception):
    """Expected job failure with a status code to record on the job."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(message)


class DelayedJobWorker(ABC):

    def process(self, payload: Dict[str, Any]) -> Optional[DelayedJob]:
        delayed_job_id = payload.get('delayed_job_id')
        try:
            job = DelayedJob.objects.get(id=delayed_job_id)
        except DelayedJob.DoesNotExist:
            logger.error(f"Delayed job {delayed_job_id} not found, skipping")
            return None

        if job.is_terminal:
            # Redelivered message for a job that already finished
            logger.warning(f"Delayed job {job.id} already {job.status}, skipping")
            return job

        try:
            result = self.process_delayed_job(job, payload)
        except DelayedJobException as e:
            job.mark_failed(e.status_code, e.message)
            return job
        except Exception as e:
            logger.exception(f"Delayed job {job.id} raised an unexpected error")
            job.mark_failed(500, str(e))
            return job

        job.mark_succeeded(result)
        logger.info(f"Delayed job {job.id} succeeded")
        return job

    @abstractmethod
    def process_delayed_job(self, job: DelayedJob, payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Do the work of the job.

        Returns:
            JSON payload stored on the job when it succeeds

        Raises:
            DelayedJobException: expected failure with its own status code
        """

    def update_job_progress(self, job: DelayedJob, processed_content: int, total_content: int,
                            progress_message: Optional[str] = None):
        job.update_progress(
            total_content=total_content,
            processed_content=processed_content,
            progress_message=progress_message,
        )
