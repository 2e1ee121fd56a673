"""
Management command to audit the ledger of issued identifiers.

Every identifier must parse, and its parsed sequence and partition must match
the columns it was recorded with. Entries recorded without a rendered
identifier (allocate_next() called without render) are skipped.

Run: python manage.py check_identifiers
"""
from django.core.management.base import BaseCommand, CommandError

from identifiers.codes import EVENT_PREFIX
from identifiers.formats import validate_event_uid, validate_uid
from identifiers.models import IssuedIdentifier


def _mismatch(issued, components):
    if issued.category == EVENT_PREFIX:
        expected = (issued.sequence, issued.sport, issued.region, issued.month, issued.year)
        actual = (components.sequence, components.sport, components.region,
                  components.date.month, components.date.year)
    else:
        expected = (issued.category, issued.sequence, issued.region, issued.month, issued.year)
        actual = tuple(components)
    return expected != actual


class Command(BaseCommand):
    help = 'Validate every issued identifier against its grammar and ledger entry'

    def handle(self, *args, **options):
        checked = 0
        skipped = 0
        problems = 0

        for issued in IssuedIdentifier.objects.order_by('created_at').iterator():
            if '#' in issued.identifier:
                skipped += 1
                continue
            checked += 1

            if issued.category == EVENT_PREFIX:
                result = validate_event_uid(issued.identifier)
            else:
                result = validate_uid(issued.identifier)

            if not result['valid']:
                problems += 1
                self.stdout.write(self.style.ERROR(f'  Invalid: "{issued.identifier}" ({result["error"]})'))
            elif _mismatch(issued, result['components']):
                problems += 1
                self.stdout.write(self.style.ERROR(
                    f'  Ledger mismatch: "{issued.identifier}" recorded as '
                    f'{issued.category}/{issued.region}/{issued.sport or "-"} '
                    f'{issued.month:02d}-{issued.year} #{issued.sequence}'
                ))

        self.stdout.write('')
        summary = f'Checked: {checked}, skipped: {skipped}, problems: {problems}'
        if problems:
            raise CommandError(summary)
        self.stdout.write(self.style.SUCCESS(f'Done. {summary}'))
