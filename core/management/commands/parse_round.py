import json
import os

from django.core.management.base import BaseCommand, CommandError     # type:ignore

from core.excel_parser import WorkbookError, parse_round_workbook


class Command(BaseCommand):
    help = "Parse a CESIM results workbook and print the round bundle as JSON (the body accepted by POST /api/rounds/ as 'data')."

    def add_arguments(self, parser):
        parser.add_argument('file', help='Path to the .xls/.xlsx workbook')
        parser.add_argument('--indent', type=int, default=2)

    def handle(self, *args, **options):
        path = options['file']
        if not os.path.exists(path):
            raise CommandError(f"File not found: {path}")

        try:
            parsed = parse_round_workbook(path)
        except WorkbookError as e:
            raise CommandError(str(e)) from e

        if options['verbosity'] >= 2:
            for line in parsed.logs:
                self.stderr.write(line)

        self.stdout.write(json.dumps(parsed.to_dict(), indent=options['indent'], ensure_ascii=False))
