"""
Enqueueing and lookup of site validation jobs.
"""
import logging
from typing import Iterable, Optional

from restoration.exceptions import JobNotFound
from restoration.models import DelayedJob, Site
from restoration.tasks.site_validation import run_site_validation
from restoration.validation import registry

logger = logging.getLogger(__name__)

SITE_VALIDATION_JOB_NAME = "Polygon Validation"


def enqueue_site_validation(site_uuid: str, validation_types: Optional[Iterable] = None) -> int:
    """
    Create a pending DelayedJob and queue validation of every active polygon of a site.

    Validation types are checked before anything is created, so an unknown
    type raises UnknownValidationType without leaving a job behind.

    Returns:
        int: id of the created DelayedJob
    """
    type_names = None
    if validation_types is not None:
        type_names = []
        for validation_type in validation_types:
            registry.resolve(validation_type)
            type_names.append(registry.normalize_validation_type(validation_type).value)

    site = Site.objects.filter(uuid=site_uuid).first()
    job = DelayedJob.objects.create(
        name=SITE_VALIDATION_JOB_NAME,
        metadata={
            'entity_type': 'site',
            'entity_uuid': site_uuid,
            'entity_name': site.name if site is not None else None,
            'validation_types': type_names,
        },
    )
    logger.info(f"Queued site validation job {job.id} for site {site_uuid}")

    run_site_validation.delay(site_uuid=site_uuid, validation_types=type_names, delayed_job_id=job.id)
    return job.id


def get_delayed_job(job_id) -> DelayedJob:
    """Look a job up by numeric id or UUID."""
    queryset = DelayedJob.objects.all()
    if isinstance(job_id, int) or str(job_id).isdigit():
        job = queryset.filter(id=int(job_id)).first()
    else:
        job = queryset.filter(uuid=str(job_id)).first()
    if job is None:
        raise JobNotFound(job_id)
    return job
