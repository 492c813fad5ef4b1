"""
Celery task validating every active polygon of a site.

Polygons are processed in chunks of CHUNK_SIZE. Progress is saved on the
DelayedJob after each chunk, so a failure part-way leaves the job failed
with the count of polygons that were done. The percentage in progress
messages is rounded down, so 100% is only reported once every polygon is
done.
"""
import logging

from celery import shared_task
from django.utils import timezone

from restoration.config.validation import get_validation_setting
from restoration.constants.validation_types import JobStatus
from restoration.services.validation_service import ValidationService
from restoration.tasks.delayed_job import DelayedJobException, DelayedJobWorker
from restoration.validation import registry

logger = logging.getLogger(__name__)


def progress_message(processed, total):
    percentage = processed * 100 // total if total else 0
    return f"Running {processed} out of {total} polygons ({percentage}%)"


class SiteValidationWorker(DelayedJobWorker):

    def __init__(self, validation_service: ValidationService = None, chunk_size: int = None):
        self.validation_service = validation_service or ValidationService()
        self.chunk_size = chunk_size

    def process_delayed_job(self, job, payload):
        site_uuid = payload['site_uuid']
        validation_types = payload.get('validation_types')
        chunk_size = self.chunk_size or get_validation_setting('CHUNK_SIZE')

        polygon_uuids = self.validation_service.get_site_polygon_uuids(site_uuid)
        total = len(polygon_uuids)
        if total == 0:
            raise DelayedJobException(404, f"No polygons found for site {site_uuid}")

        # A redelivered running job resumes after the polygons it already
        # reported; active polygon ids are ordered by id, so the offset is stable
        processed = 0
        if job.status == JobStatus.RUNNING and job.processed_content:
            processed = min(job.processed_content, total)

        if processed:
            logger.info(f"Resuming validation of site {site_uuid} at {processed} of {total} polygons (job {job.id})")
            self.update_job_progress(job, processed, total, progress_message(processed, total))
        else:
            logger.info(f"Starting validation of {total} polygons for site {site_uuid} (job {job.id})")
            self.update_job_progress(job, 0, total, f"Starting validation of {total} polygons...")

        for start in range(processed, total, chunk_size):
            chunk = polygon_uuids[start:start + chunk_size]
            self.validation_service.validate_polygons(chunk, validation_types)
            processed += len(chunk)
            self.update_job_progress(job, processed, total, progress_message(processed, total))
            logger.debug(f"Job {job.id}: {progress_message(processed, total)}")

        job.progress_message = f"Completed validation of {total} polygons"
        job.save(update_fields=['progress_message', 'updated_at'])
        return self.build_summary(site_uuid, polygon_uuids, validation_types)

    def build_summary(self, site_uuid, polygon_uuids, validation_types):
        """Valid/invalid counts per criteria over the site's current results."""
        if validation_types is None:
            validation_types = registry.get_implemented_types()

        criteria = []
        for validation_type in validation_types:
            normalized = registry.normalize_validation_type(validation_type)
            criteria_id = registry.get_criteria_id(normalized)
            results = self.validation_service.result_store.current_for_polygons(polygon_uuids, criteria_id)
            valid_count = sum(1 for result in results if result.valid)
            criteria.append({
                'criteriaId': criteria_id,
                'validationType': normalized.value,
                'valid': valid_count,
                'invalid': len(results) - valid_count,
            })

        return {
            'siteUuid': site_uuid,
            'totalPolygons': len(polygon_uuids),
            'validatedPolygons': len(polygon_uuids),
            'completedAt': timezone.now().isoformat(),
            'criteria': criteria,
        }


@shared_task(bind=True, acks_late=True)
def run_site_validation(self, site_uuid, validation_types=None, delayed_job_id=None):
    """Validate all active polygons of a site, tracking progress on a DelayedJob."""
    logger.info(f"Site validation task {self.request.id} received for site {site_uuid} (job {delayed_job_id})")
    SiteValidationWorker().process({
        'site_uuid': site_uuid,
        'validation_types': validation_types,
        'delayed_job_id': delayed_job_id,
    })
    return delayed_job_id
