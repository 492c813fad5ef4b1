"""
Tests for site validation jobs: enqueueing, progress tracking and failure handling.
"""
from unittest import mock

from restoration.constants.validation_types import JobStatus, ValidationType
from restoration.exceptions import JobNotFound, UnknownValidationType
from restoration.models import CriteriaSite, DelayedJob
from restoration.services.delayed_job_service import enqueue_site_validation, get_delayed_job
from restoration.services.validation_service import ValidationService
from restoration.tasks.delayed_job import DelayedJobException, DelayedJobWorker
from restoration.tasks.site_validation import SiteValidationWorker, progress_message
from restoration.tests.base import ValidationTestCase, bowtie, make_site


class RecordingSiteValidationWorker(SiteValidationWorker):
    """Keeps every progress update for assertions."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.updates = []

    def update_job_progress(self, job, processed_content, total_content, progress_message=None):
        self.updates.append((processed_content, total_content, progress_message))
        super().update_job_progress(job, processed_content, total_content, progress_message)


class EnqueueSiteValidationTest(ValidationTestCase):
    """Tasks run eagerly under the test settings."""

    def test_site_without_polygons_fails_with_404(self):
        empty_site = make_site(self.project, name='Empty')

        job = get_delayed_job(enqueue_site_validation(empty_site.uuid))

        self.assertEqual(job.status, JobStatus.FAILED)
        self.assertEqual(job.status_code, 404)
        self.assertIsNone(job.total_content)
        self.assertIn('No polygons found', job.payload['message'])

    def test_successful_run(self):
        polygons = [self.add_polygon(calc_area=300) for _ in range(2)] + [self.add_polygon(geom=bowtie(), calc_area=400)]

        job = get_delayed_job(enqueue_site_validation(self.site.uuid))

        self.assertEqual(job.status, JobStatus.SUCCEEDED)
        self.assertEqual(job.status_code, 200)
        self.assertEqual(job.total_content, 3)
        self.assertEqual(job.processed_content, 3)
        self.assertEqual(job.progress_message, 'Completed validation of 3 polygons')
        self.assertEqual(job.name, 'Polygon Validation')
        self.assertEqual(job.metadata['entity_uuid'], self.site.uuid)
        self.assertEqual(job.metadata['entity_name'], 'Test Site')
        self.assertEqual(
            CriteriaSite.objects.filter(polygon_uuid__in=[polygon.polygon_uuid for polygon in polygons]).count(),
            18,
        )

        summary = {entry['criteriaId']: entry for entry in job.payload['criteria']}
        self.assertEqual(job.payload['totalPolygons'], 3)
        self.assertEqual(summary[4]['valid'], 2)
        self.assertEqual(summary[4]['invalid'], 1)
        self.assertEqual(summary[12]['valid'], 3)

    def test_requested_types_only(self):
        polygon = self.add_polygon()

        job = get_delayed_job(enqueue_site_validation(self.site.uuid, ['SELF_INTERSECTION']))

        self.assertEqual(job.status, JobStatus.SUCCEEDED)
        self.assertEqual(list(CriteriaSite.objects.filter(polygon_uuid=polygon.polygon_uuid).values_list('criteria_id', flat=True)), [4])
        self.assertEqual([entry['validationType'] for entry in job.payload['criteria']], ['SELF_INTERSECTION'])

    def test_unknown_type_creates_no_job(self):
        self.add_polygon()

        with self.assertRaises(UnknownValidationType):
            enqueue_site_validation(self.site.uuid, [ValidationType.DUPLICATE_GEOMETRY])

        self.assertEqual(DelayedJob.objects.count(), 0)

    def test_task_is_queued_with_job_id(self):
        with mock.patch('restoration.services.delayed_job_service.run_site_validation') as task:
            job_id = enqueue_site_validation(self.site.uuid, ['SPIKES'])

        task.delay.assert_called_once_with(site_uuid=self.site.uuid, validation_types=['SPIKES'], delayed_job_id=job_id)
        self.assertEqual(get_delayed_job(job_id).status, JobStatus.PENDING)


class SiteValidationWorkerTest(ValidationTestCase):

    def setUp(self):
        super().setUp()
        self.polygons = [self.add_polygon() for _ in range(5)]
        self.job = DelayedJob.objects.create(name='Polygon Validation')
        self.payload = {
            'site_uuid': self.site.uuid,
            'validation_types': ['SELF_INTERSECTION'],
            'delayed_job_id': self.job.id,
        }

    def test_progress_after_each_chunk(self):
        worker = RecordingSiteValidationWorker(chunk_size=2)

        worker.process(self.payload)

        self.assertEqual([update[0] for update in worker.updates], [0, 2, 4, 5])
        self.assertTrue(all(update[1] == 5 for update in worker.updates))
        self.assertEqual(worker.updates[1][2], 'Running 2 out of 5 polygons (40%)')
        self.assertEqual(worker.updates[-1][2], 'Running 5 out of 5 polygons (100%)')
        self.job.refresh_from_db()
        self.assertEqual(self.job.status, JobStatus.SUCCEEDED)

    def test_chunks_are_processed_in_order(self):
        service = ValidationService()
        worker = SiteValidationWorker(validation_service=service, chunk_size=2)

        with mock.patch.object(service, 'validate_polygons', return_value=[]) as validate:
            worker.process(self.payload)

        chunks = [call.args[0] for call in validate.call_args_list]
        self.assertEqual(chunks, [
            [polygon.polygon_uuid for polygon in self.polygons[0:2]],
            [polygon.polygon_uuid for polygon in self.polygons[2:4]],
            [polygon.polygon_uuid for polygon in self.polygons[4:5]],
        ])

    def test_failure_keeps_progress_and_message(self):
        """A crash in the second chunk fails the job with 500 after two polygons."""
        service = ValidationService()
        worker = SiteValidationWorker(validation_service=service, chunk_size=2)

        with mock.patch.object(service, 'validate_polygons', side_effect=[[], RuntimeError('geometry backend down')]):
            worker.process(self.payload)

        self.job.refresh_from_db()
        self.assertEqual(self.job.status, JobStatus.FAILED)
        self.assertEqual(self.job.status_code, 500)
        self.assertEqual(self.job.payload, {'message': 'geometry backend down'})
        self.assertEqual(self.job.processed_content, 2)
        self.assertEqual(self.job.total_content, 5)

    def test_redelivered_running_job_resumes_without_losing_progress(self):
        """A job interrupted after two of five polygons continues from the third."""
        self.job.update_progress(total_content=5, processed_content=2, progress_message=progress_message(2, 5))
        service = ValidationService()
        worker = RecordingSiteValidationWorker(validation_service=service, chunk_size=2)

        with mock.patch.object(service, 'validate_polygons', return_value=[]) as validate:
            worker.process(self.payload)

        processed = [update[0] for update in worker.updates]
        self.assertEqual(processed, [2, 4, 5])
        self.assertEqual(processed, sorted(processed))
        self.assertEqual([call.args[0] for call in validate.call_args_list], [
            [polygon.polygon_uuid for polygon in self.polygons[2:4]],
            [polygon.polygon_uuid for polygon in self.polygons[4:5]],
        ])
        self.job.refresh_from_db()
        self.assertEqual(self.job.status, JobStatus.SUCCEEDED)
        self.assertEqual(self.job.processed_content, 5)

    def test_empty_type_list_runs_no_checks(self):
        worker = SiteValidationWorker(chunk_size=2)

        worker.process({**self.payload, 'validation_types': []})

        self.job.refresh_from_db()
        self.assertEqual(self.job.status, JobStatus.SUCCEEDED)
        self.assertEqual(self.job.processed_content, 5)
        self.assertEqual(self.job.payload['criteria'], [])
        self.assertEqual(CriteriaSite.objects.count(), 0)

    def test_missing_job_is_skipped(self):
        worker = SiteValidationWorker()

        self.assertIsNone(worker.process({**self.payload, 'delayed_job_id': self.job.id + 1000}))
        self.assertEqual(CriteriaSite.objects.count(), 0)

    def test_redelivered_finished_job_is_ignored(self):
        self.job.mark_succeeded({'siteUuid': self.site.uuid})
        service = ValidationService()
        worker = SiteValidationWorker(validation_service=service)

        with mock.patch.object(service, 'validate_polygons') as validate:
            worker.process(self.payload)

        validate.assert_not_called()
        self.job.refresh_from_db()
        self.assertEqual(self.job.payload, {'siteUuid': self.site.uuid})


class DelayedJobWorkerTest(ValidationTestCase):

    def test_delayed_job_exception_keeps_status_code(self):
        class RejectingWorker(DelayedJobWorker):
            def process_delayed_job(self, job, payload):
                raise DelayedJobException(422, 'Polygons are locked')

        job = DelayedJob.objects.create()

        RejectingWorker().process({'delayed_job_id': job.id})

        job.refresh_from_db()
        self.assertEqual(job.status, JobStatus.FAILED)
        self.assertEqual(job.status_code, 422)
        self.assertEqual(job.payload, {'message': 'Polygons are locked'})

    def test_terminal_job_cannot_change(self):
        job = DelayedJob.objects.create()
        job.mark_failed(500, 'boom')

        with self.assertRaises(ValueError):
            job.mark_succeeded({})
        with self.assertRaises(ValueError):
            job.update_progress(processed_content=1)

    def test_progress_moves_job_to_running(self):
        job = DelayedJob.objects.create()

        job.update_progress(total_content=10, processed_content=0, progress_message=progress_message(0, 10))

        job.refresh_from_db()
        self.assertEqual(job.status, JobStatus.RUNNING)
        self.assertEqual(job.progress_message, 'Running 0 out of 10 polygons (0%)')

    def test_progress_percentage_rounds_down(self):
        self.assertEqual(progress_message(199, 200), 'Running 199 out of 200 polygons (99%)')
        self.assertEqual(progress_message(1, 3), 'Running 1 out of 3 polygons (33%)')
        self.assertEqual(progress_message(2, 3), 'Running 2 out of 3 polygons (66%)')
        self.assertEqual(progress_message(200, 200), 'Running 200 out of 200 polygons (100%)')

    def test_get_delayed_job(self):
        job = DelayedJob.objects.create()

        self.assertEqual(get_delayed_job(job.id), job)
        self.assertEqual(get_delayed_job(job.uuid), job)
        with self.assertRaises(JobNotFound):
            get_delayed_job(job.id + 1000)
