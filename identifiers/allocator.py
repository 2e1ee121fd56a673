"""
Sequence allocation for identifier partitions.

A partition is (category, region, sport, month, year). Every partition has
its own sequence space starting at 1. Two strategies are supported:

- counter: a SequenceCounter row per partition, locked and incremented with a
  conditional UPDATE inside one transaction.
- scan: read the highest sequence in the IssuedIdentifier ledger and insert
  max + 1; the ledger's unique constraints reject a concurrent duplicate.

Both strategies write the ledger row in the same transaction as the
allocation, and retry on IntegrityError / OperationalError with backoff.
"""
import logging
import random
import time
from typing import NamedTuple

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.db import IntegrityError, OperationalError, transaction
from django.db.models import F, Max
from django.utils import timezone

from .exceptions import AllocationConflict, SequenceExhausted
from .models import IssuedIdentifier, SequenceCounter

logger = logging.getLogger(__name__)

MAX_SEQUENCE = 99999
MAX_EVENT_SEQUENCE = 9999

STRATEGY_COUNTER = 'counter'
STRATEGY_SCAN = 'scan'
STRATEGIES = (STRATEGY_COUNTER, STRATEGY_SCAN)


class PartitionKey(NamedTuple):
    category: str
    region: str
    month: int
    year: int
    sport: str = ''

    def lookup(self):
        """ORM filter kwargs selecting this partition."""
        return self._asdict()

    def claim(self, sequence):
        """Ledger entry used when the caller does not render an identifier."""
        return f"{self}#{sequence:05d}"

    def __str__(self):
        sport = f"-{self.sport}" if self.sport else ''
        return f"{self.category}{sport}-{self.region}-{self.month:02d}{self.year}"


def ledger_max(partition_key):
    """Highest sequence recorded in the ledger for a partition (0 if none)."""
    result = IssuedIdentifier.objects.filter(
        **partition_key.lookup()
    ).aggregate(highest=Max('sequence'))
    return result['highest'] or 0


def sync_counter(partition_key):
    """
    Raise the partition's counter to the ledger maximum.
    Counters are never lowered. Returns (old_value, new_value).
    """
    with transaction.atomic():
        counter, _ = SequenceCounter.objects.select_for_update().get_or_create(
            **partition_key.lookup()
        )
        old_value = counter.last_value
        highest = ledger_max(partition_key)
        if highest > old_value:
            SequenceCounter.objects.filter(
                pk=counter.pk, last_value__lt=highest
            ).update(last_value=highest, updated_at=timezone.now())
            logger.info(f"Raised counter {partition_key} from {old_value} to {highest}")
            return old_value, highest
    return old_value, old_value


class SequenceAllocator:
    """
    Hands out the next sequence number of a partition, never the same
    number twice. Safe across threads and processes sharing the database.
    """

    def __init__(self, strategy=None, max_attempts=None, backoff=None):
        self.strategy = strategy or getattr(settings, 'UID_ALLOCATION_STRATEGY', STRATEGY_COUNTER)
        if self.strategy not in STRATEGIES:
            raise ImproperlyConfigured(
                f"UID_ALLOCATION_STRATEGY must be one of {STRATEGIES}, got {self.strategy!r}"
            )
        if max_attempts is None:
            max_attempts = getattr(settings, 'UID_MAX_ATTEMPTS', 5)
        if max_attempts < 1:
            raise ImproperlyConfigured(f"UID_MAX_ATTEMPTS must be at least 1, got {max_attempts}")
        self.max_attempts = max_attempts
        if backoff is None:
            backoff = getattr(settings, 'UID_BACKOFF_SECONDS', 0.1)
        self.backoff = backoff

    def allocate_next(self, partition_key, render=None, capacity=MAX_SEQUENCE):
        """
        Allocate the next sequence number for partition_key.

        Args:
            partition_key: PartitionKey
            render: optional callable turning the sequence into the final
                identifier; the identifier is recorded in the ledger in the
                same transaction, so a clash on either unique constraint
                triggers a retry instead of a duplicate.
            capacity: highest sequence the partition may hand out

        Returns:
            int: the allocated sequence number

        Raises:
            SequenceExhausted: the partition is full (not retried)
            AllocationConflict: retries ran out
        """
        if self.strategy == STRATEGY_COUNTER:
            next_sequence = self._next_from_counter
        else:
            next_sequence = self._next_from_scan

        for attempt in range(1, self.max_attempts + 1):
            try:
                with transaction.atomic():
                    sequence = next_sequence(partition_key, capacity)
                    identifier = render(sequence) if render else partition_key.claim(sequence)
                    IssuedIdentifier.objects.create(
                        identifier=identifier, sequence=sequence, **partition_key.lookup()
                    )
                return sequence
            except IntegrityError as e:
                logger.warning(
                    f"Sequence conflict in {partition_key} (attempt {attempt}/{self.max_attempts}): {e}"
                )
                if self.strategy == STRATEGY_COUNTER:
                    # The ledger is ahead of the counter (imported or scan-issued rows)
                    self._sync_quietly(partition_key)
            except OperationalError as e:
                logger.warning(
                    f"Storage error allocating in {partition_key} (attempt {attempt}/{self.max_attempts}): {e}"
                )

            if attempt < self.max_attempts:
                self._sleep(attempt)

        logger.error(f"Giving up on partition {partition_key} after {self.max_attempts} attempts")
        raise AllocationConflict(partition_key, self.max_attempts)

    def _next_from_counter(self, partition_key, capacity):
        counter, created = SequenceCounter.objects.select_for_update().get_or_create(
            **partition_key.lookup()
        )
        if created:
            logger.info(f"Opened sequence partition {partition_key}")
        updated = SequenceCounter.objects.filter(
            pk=counter.pk, last_value__lt=capacity
        ).update(last_value=F('last_value') + 1, updated_at=timezone.now())
        if not updated:
            raise SequenceExhausted(partition_key, capacity)
        counter.refresh_from_db(fields=['last_value'])
        return counter.last_value

    def _next_from_scan(self, partition_key, capacity):
        sequence = ledger_max(partition_key) + 1
        if sequence > capacity:
            raise SequenceExhausted(partition_key, capacity)
        return sequence

    def _sync_quietly(self, partition_key):
        try:
            sync_counter(partition_key)
        except (IntegrityError, OperationalError) as e:
            logger.warning(f"Could not resync counter {partition_key}: {e}")

    def _sleep(self, attempt):
        if self.backoff <= 0:
            return
        time.sleep(self.backoff * attempt + random.uniform(0, self.backoff))
