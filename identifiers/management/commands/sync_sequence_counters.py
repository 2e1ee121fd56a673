"""
Management command to bring sequence counters in line with the ledger of
issued identifiers.

Needed after identifiers were issued with UID_ALLOCATION_STRATEGY=scan, or
after legacy identifiers were imported into the ledger. A counter is only
ever raised, never lowered, so no sequence is handed out twice.

Run: python manage.py sync_sequence_counters
Use --dry-run to only print what would be changed.
"""
from django.core.management.base import BaseCommand
from django.db.models import Max

from identifiers.allocator import PartitionKey, sync_counter
from identifiers.models import IssuedIdentifier, SequenceCounter


class Command(BaseCommand):
    help = 'Raise every sequence counter to the highest sequence issued in its partition'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Only show what would be updated, do not save.',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']
        if dry_run:
            self.stdout.write(self.style.WARNING('Dry run: no changes will be saved.'))

        partitions = IssuedIdentifier.objects.values(
            'category', 'region', 'sport', 'month', 'year'
        ).annotate(highest=Max('sequence')).order_by('year', 'month', 'category', 'region', 'sport')

        raised = 0
        in_sync = 0

        for row in partitions:
            highest = row.pop('highest')
            key = PartitionKey(**row)
            counter = SequenceCounter.objects.filter(**key.lookup()).first()
            current = counter.last_value if counter else 0

            if current >= highest:
                in_sync += 1
                continue

            if not dry_run:
                sync_counter(key)
            raised += 1
            self.stdout.write(f'  {key}: {current} -> {highest}')

        self.stdout.write('')
        self.stdout.write(self.style.SUCCESS(f'Done. Raised: {raised}, already in sync: {in_sync}'))
        if dry_run and raised:
            self.stdout.write(self.style.WARNING('Run without --dry-run to apply changes.'))
