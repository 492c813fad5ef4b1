from django.core.management.base import BaseCommand

from restoration.exceptions import ValidationEngineException
from restoration.services.validation_service import ValidationService


class Command(BaseCommand):
    help = 'Run polygon checks synchronously and store the results'

    def add_arguments(self, parser):
        parser.add_argument(
            'polygon_uuids',
            nargs='+',
            help='Polygon UUIDs to validate'
        )
        parser.add_argument(
            '--type',
            action='append',
            dest='validation_types',
            help='Validation type to run (repeatable, defaults to all implemented types)'
        )

    def handle(self, *args, **options):
        service = ValidationService()

        try:
            results = service.validate_polygons(options['polygon_uuids'], options['validation_types'])
        except ValidationEngineException as e:
            self.stdout.write(self.style.ERROR(f'Validation failed ({e.status_code}): {e.message}'))
            return

        for result in results:
            line = f"{result['polygonUuid']}  criteria {result['criteriaId']:>2}  {'valid' if result['valid'] else 'INVALID'}"
            if result['valid']:
                self.stdout.write(line)
            else:
                self.stdout.write(self.style.WARNING(line))

        invalid = sum(1 for result in results if not result['valid'])
        self.stdout.write(self.style.SUCCESS(f'Stored {len(results)} results ({invalid} invalid)'))
