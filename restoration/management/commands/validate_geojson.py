import json

from django.core.management.base import BaseCommand, CommandError

from restoration.exceptions import ValidationEngineException
from restoration.services.validation_service import ValidationService


class Command(BaseCommand):
    help = 'Check GeoJSON FeatureCollection files without storing any results'

    def add_arguments(self, parser):
        parser.add_argument(
            'paths',
            nargs='+',
            help='GeoJSON FeatureCollection files'
        )
        parser.add_argument(
            '--type',
            action='append',
            dest='validation_types',
            help='Validation type to run (repeatable, defaults to every check that works on raw geometries)'
        )

    def handle(self, *args, **options):
        collections = []
        for path in options['paths']:
            try:
                with open(path) as f:
                    collections.append(json.load(f))
            except (OSError, ValueError) as e:
                raise CommandError(f'Could not read {path}: {e}')

        try:
            results = ValidationService().validate_geometries(collections, options['validation_types'])
        except ValidationEngineException as e:
            self.stdout.write(self.style.ERROR(f'Validation failed ({e.status_code}): {e.message}'))
            return

        invalid = 0
        for result in results:
            for criteria in result['criteriaList']:
                line = f"{result['polygonUuid']}  {criteria['validationType']:<18} {'valid' if criteria['valid'] else 'INVALID'}"
                if criteria['valid']:
                    self.stdout.write(line)
                else:
                    invalid += 1
                    self.stdout.write(self.style.WARNING(line))

        self.stdout.write(self.style.SUCCESS(f'Checked {len(results)} features ({invalid} failed checks)'))
