"""
Database models backing identifier allocation.
"""
from django.db import models


class SequenceCounter(models.Model):
    """
    One row per partition (category + region + sport + month + year).
    last_value is the highest sequence number handed out in the partition;
    it only ever moves up.
    """
    id = models.BigAutoField(primary_key=True)
    category = models.CharField(max_length=4, help_text="e.g. a (student), c (coach), EVT (event)")
    region = models.CharField(max_length=2, help_text="Two-letter state code, e.g. DL")
    sport = models.CharField(max_length=2, blank=True, default='', help_text="Sport code for event partitions, empty otherwise")
    month = models.PositiveSmallIntegerField()
    year = models.PositiveSmallIntegerField()
    last_value = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-year', '-month', 'category', 'region', 'sport']
        verbose_name = 'Sequence Counter'
        verbose_name_plural = 'Sequence Counters'
        constraints = [
            models.UniqueConstraint(
                fields=['category', 'region', 'sport', 'month', 'year'],
                name='unique_sequence_partition',
            ),
        ]

    def __str__(self):
        sport = f"/{self.sport}" if self.sport else ''
        return f"{self.category}/{self.region}{sport} {self.month:02d}-{self.year}: {self.last_value}"


class IssuedIdentifier(models.Model):
    """
    Append-only ledger of every identifier the allocator has handed out.
    Both the identifier and the (partition, sequence) pair are unique, so a
    second writer that computed the same sequence fails on insert.
    """
    id = models.BigAutoField(primary_key=True)
    identifier = models.CharField(max_length=32, unique=True)
    category = models.CharField(max_length=4)
    region = models.CharField(max_length=2)
    sport = models.CharField(max_length=2, blank=True, default='')
    month = models.PositiveSmallIntegerField()
    year = models.PositiveSmallIntegerField()
    sequence = models.PositiveIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = 'Issued Identifier'
        verbose_name_plural = 'Issued Identifiers'
        constraints = [
            models.UniqueConstraint(
                fields=['category', 'region', 'sport', 'month', 'year', 'sequence'],
                name='unique_issued_sequence',
            ),
        ]

    def __str__(self):
        return self.identifier
