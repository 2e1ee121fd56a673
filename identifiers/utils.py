"""
Identifier functions used by registration, event and payment code.

Registration code calls generate_uid() when it creates a user and stores the
result as an immutable field; event code does the same with
generate_event_uid(). Certificates and orders use the composite builders.
"""
import logging
from datetime import datetime

from asgiref.sync import sync_to_async
from django.utils import timezone

from .allocator import MAX_EVENT_SEQUENCE, MAX_SEQUENCE, PartitionKey, SequenceAllocator
from .codes import (
    EVENT_PREFIX, resolve_category, resolve_region, resolve_sport,
)
from .composite import (
    build_certificate_identifier, build_order_identifier, split_composite_identifier,
)
from .exceptions import InvalidCategory, MalformedIdentifier
from .formats import (
    EVENT_UID_LENGTH, USER_UID_LENGTH, check_issue_year, format_event_uid,
    format_uid, format_uid_for_display, parse_event_uid, parse_uid,
    validate_event_uid, validate_uid,
)

logger = logging.getLogger(__name__)

__all__ = [
    'generate_uid', 'generate_event_uid', 'agenerate_uid', 'agenerate_event_uid',
    'validate_uid', 'validate_event_uid', 'validate_any_identifier',
    'parse_uid', 'parse_event_uid', 'format_uid_for_display',
    'build_certificate_identifier', 'build_order_identifier',
    'split_composite_identifier',
]


def _as_date(value):
    if value is None:
        return timezone.localdate()
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        return value.date()
    return value


def generate_uid(category, region, date=None, allocator=None):
    """
    Generate a user identifier.
    Format: <category><sequence:5><state><MM><YYYY>, e.g. a00001DL112025

    Args:
        category: STUDENT, COACH, INSTITUTE, CLUB or EVENT_INCHARGE
        region: state (or city) name, e.g. "Delhi"
        date: registration date, defaults to today
        allocator: SequenceAllocator to use (configured one by default)

    Raises:
        InvalidCategory, MissingRegion, SequenceExhausted, AllocationConflict
        ValueError: the date falls outside UID_MIN_YEAR..UID_MAX_YEAR
    """
    category_code = resolve_category(category)
    if category_code == EVENT_PREFIX:
        raise InvalidCategory(category)
    region_code = resolve_region(region)
    day = _as_date(date)
    check_issue_year(day.year)

    key = PartitionKey(category_code, region_code, day.month, day.year)
    allocator = allocator or SequenceAllocator()
    sequence = allocator.allocate_next(
        key,
        render=lambda seq: format_uid(category_code, seq, region_code, day.month, day.year),
        capacity=MAX_SEQUENCE,
    )
    uid = format_uid(category_code, sequence, region_code, day.month, day.year)
    logger.info(f"Generated UID {uid} for {category} in {region!r}")
    return uid


def generate_event_uid(sport, region, date=None, allocator=None):
    """
    Generate an event identifier.
    Format: EVT-<sequence:4>-<sport>-<state>-<DDMMYY>, e.g. EVT-0001-FB-DL-071125

    The sequence runs per sport, state and month.
    """
    sport_code = resolve_sport(sport)
    region_code = resolve_region(region)
    day = _as_date(date)
    check_issue_year(day.year, event=True)

    key = PartitionKey(EVENT_PREFIX, region_code, day.month, day.year, sport=sport_code)
    allocator = allocator or SequenceAllocator()
    sequence = allocator.allocate_next(
        key,
        render=lambda seq: format_event_uid(seq, sport_code, region_code, day),
        capacity=MAX_EVENT_SEQUENCE,
    )
    uid = format_event_uid(sequence, sport_code, region_code, day)
    logger.info(f"Generated event UID {uid} for {sport!r} in {region!r}")
    return uid


agenerate_uid = sync_to_async(generate_uid)
agenerate_event_uid = sync_to_async(generate_event_uid)


def validate_any_identifier(identifier):
    """
    Validate a user, event, certificate or order identifier. Never raises.

    Returns:
        dict: {'valid': True, 'kind': ..., 'components': ...} or
              {'valid': False, 'error': str}
    """
    if not isinstance(identifier, str) or not identifier.strip():
        return {'valid': False, 'error': 'identifier is required'}
    identifier = identifier.strip()

    if len(identifier) == USER_UID_LENGTH:
        result, kind = validate_uid(identifier), 'user'
    elif len(identifier) == EVENT_UID_LENGTH and identifier.startswith(f"{EVENT_PREFIX}-"):
        result, kind = validate_event_uid(identifier), 'event'
    else:
        try:
            kind, event_id, user_id = split_composite_identifier(identifier)
        except MalformedIdentifier as e:
            return {'valid': False, 'error': e.reason}
        result = {
            'valid': True,
            'components': {
                'event': parse_event_uid(event_id),
                'user': parse_uid(user_id),
            },
        }

    if result['valid']:
        result['kind'] = kind
    return result
