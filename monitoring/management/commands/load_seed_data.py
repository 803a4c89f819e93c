from django.core.management.base import BaseCommand, CommandError

from monitoring.application.seeding import initialize_seed_data, reset_and_initialize
from monitoring.domain.exceptions import SeedDataAlreadyLoaded, SeedDataError


class Command(BaseCommand):
    help = "Load the demonstration seed document into an empty store (or reset and reload it)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete all readings, suggestions and departments before loading.",
        )
        parser.add_argument(
            "--path",
            help="Seed document to load instead of ECOMETER_SEED_DATA_PATH.",
        )

    def handle(self, *args, **options):
        try:
            if options["reset"]:
                result = reset_and_initialize(options["path"])
            else:
                result = initialize_seed_data(options["path"])
        except SeedDataAlreadyLoaded as exc:
            self.stdout.write(self.style.WARNING(str(exc)))
            return
        except SeedDataError as exc:
            raise CommandError(str(exc))

        self.stdout.write(self.style.SUCCESS(
            f"{result['message']} departments={result['departments']} "
            f"energyData={result['energyData']} aiSuggestions={result['aiSuggestions']}"
        ))
