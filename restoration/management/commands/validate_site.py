from django.core.management.base import BaseCommand

from restoration.exceptions import ValidationEngineException
from restoration.services.delayed_job_service import enqueue_site_validation, get_delayed_job


class Command(BaseCommand):
    help = 'Queue validation of every active polygon of a site'

    def add_arguments(self, parser):
        parser.add_argument(
            'site_uuid',
            help='Site UUID'
        )
        parser.add_argument(
            '--type',
            action='append',
            dest='validation_types',
            help='Validation type to run (repeatable, defaults to all implemented types)'
        )
        parser.add_argument(
            '--wait',
            action='store_true',
            help='Print the job state after queueing (final when tasks run eagerly)'
        )

    def handle(self, *args, **options):
        site_uuid = options['site_uuid']

        try:
            job_id = enqueue_site_validation(site_uuid, options['validation_types'])
        except ValidationEngineException as e:
            self.stdout.write(self.style.ERROR(f'Could not queue validation ({e.status_code}): {e.message}'))
            return

        self.stdout.write(self.style.SUCCESS(f'Queued delayed job {job_id} for site {site_uuid}'))

        if options['wait']:
            job = get_delayed_job(job_id)
            self.stdout.write(f'  Status: {job.status} ({job.status_code or "-"})')
            self.stdout.write(f'  Progress: {job.processed_content or 0}/{job.total_content or 0}')
            self.stdout.write(f'  Message: {job.progress_message or "(none)"}')
            if job.payload:
                self.stdout.write(f'  Payload: {job.payload}')
