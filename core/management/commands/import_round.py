import os

from django.core.management.base import BaseCommand, CommandError     # type:ignore
from django.utils import timezone                                     # type:ignore

from core.excel_parser import WorkbookError, parse_round_workbook
from core.services import ImportValidationError, import_round


class Command(BaseCommand):
    help = "Parse a CESIM results workbook and store it as a new round."

    def add_arguments(self, parser):
        parser.add_argument('file', help='Path to the .xls/.xlsx workbook')
        parser.add_argument('--number', type=int, required=True, help='Round number')
        parser.add_argument('--date', default=None, help='Round date (YYYY-MM-DD), defaults to today')
        parser.add_argument('--comment', default=None)

    def handle(self, *args, **options):
        path = options['file']
        if not os.path.exists(path):
            raise CommandError(f"File not found: {path}")

        round_date = options['date'] or timezone.localdate().isoformat()
        try:
            parsed = parse_round_workbook(path)
            rnd = import_round(options['number'], round_date, parsed.to_dict(), comment=options['comment'])
        except (WorkbookError, ImportValidationError) as e:
            raise CommandError(str(e)) from e

        if options['verbosity'] >= 2:
            for line in parsed.logs:
                self.stdout.write(line)
        if parsed.defaulted_cells:
            self.stdout.write(self.style.WARNING(f"{parsed.defaulted_cells} cell(s) defaulted to 0"))
        self.stdout.write(self.style.SUCCESS(
            f"Imported round {rnd.number} (id={rnd.pk}) with {len(parsed.teams)} teams"
        ))
