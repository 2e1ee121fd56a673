"""Tests for the identifier management commands."""
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from identifiers.allocator import PartitionKey
from identifiers.models import IssuedIdentifier, SequenceCounter
from identifiers.utils import generate_event_uid, generate_uid

STUDENTS_DL = PartitionKey("a", "DL", 11, 2025)


def _import_legacy(sequence):
    IssuedIdentifier.objects.create(
        identifier=f"a{sequence:05d}DL112025", sequence=sequence, **STUDENTS_DL.lookup()
    )


@pytest.mark.django_db
class TestSyncSequenceCounters:
    def test_raises_lagging_counters(self):
        _import_legacy(12)
        out = StringIO()

        call_command("sync_sequence_counters", stdout=out)

        assert SequenceCounter.objects.get(**STUDENTS_DL.lookup()).last_value == 12
        assert "a-DL-112025: 0 -> 12" in out.getvalue()
        assert "Raised: 1" in out.getvalue()

    def test_dry_run_changes_nothing(self):
        _import_legacy(12)
        out = StringIO()

        call_command("sync_sequence_counters", "--dry-run", stdout=out)

        assert not SequenceCounter.objects.exists()
        assert "Dry run" in out.getvalue()

    def test_counters_in_sync_are_left_alone(self, november_2025):
        generate_uid("STUDENT", "Delhi", november_2025)
        out = StringIO()

        call_command("sync_sequence_counters", stdout=out)

        assert "Raised: 0, already in sync: 1" in out.getvalue()


@pytest.mark.django_db
class TestCheckIdentifiers:
    def test_clean_ledger(self, november_2025):
        generate_uid("STUDENT", "Delhi", november_2025)
        generate_event_uid("Football", "Delhi", november_2025)
        out = StringIO()

        call_command("check_identifiers", stdout=out)

        assert "Checked: 2, skipped: 0, problems: 0" in out.getvalue()

    def test_reports_malformed_and_mismatched_entries(self):
        IssuedIdentifier.objects.create(
            identifier="a00001DL132025", sequence=1, **STUDENTS_DL.lookup()
        )
        IssuedIdentifier.objects.create(
            identifier="a00009DL112025", sequence=2, **STUDENTS_DL.lookup()
        )
        out = StringIO()

        with pytest.raises(CommandError, match="problems: 2"):
            call_command("check_identifiers", stdout=out)

        assert "Invalid" in out.getvalue()
        assert "Ledger mismatch" in out.getvalue()

    def test_claims_are_skipped(self):
        IssuedIdentifier.objects.create(
            identifier=STUDENTS_DL.claim(1), sequence=1, **STUDENTS_DL.lookup()
        )
        out = StringIO()

        call_command("check_identifiers", stdout=out)

        assert "skipped: 1" in out.getvalue()
