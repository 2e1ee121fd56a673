"""
Formatting, parsing and validation of user and event identifiers.

User identifier (14 characters):
    <category><sequence:5><region:2><month:2><year:4>
    e.g. a00001DL112025 -> student #1 from Delhi, November 2025

Event identifier (21 characters):
    EVT-<sequence:4>-<sport:2>-<region:2>-<DDMMYY>
    e.g. EVT-0001-FB-DL-071125

Nothing in here touches the database: an identifier describes itself.
"""
import re
from datetime import date
from typing import NamedTuple

from django.conf import settings

from .codes import CATEGORY_CODES, EVENT_PREFIX, category_for_code
from .exceptions import MalformedIdentifier

USER_UID_LENGTH = 14
EVENT_UID_LENGTH = 21

USER_UID_RE = re.compile(r'^([a-z])(\d{5})([A-Z]{2})(\d{2})(\d{4})$')
EVENT_UID_RE = re.compile(
    r'^' + EVENT_PREFIX + r'-(\d{4})-([A-Z]{2})-([A-Z]{2})-(\d{2})(\d{2})(\d{2})$'
)
DISPLAY_UID_RE = re.compile(r'^([a-z])-(\d{5})-([A-Z]{2})-(\d{2})-(\d{4})$')


class UIDComponents(NamedTuple):
    category: str
    sequence: int
    region: str
    month: int
    year: int

    @property
    def role(self):
        return category_for_code(self.category)


class EventUIDComponents(NamedTuple):
    sequence: int
    sport: str
    region: str
    date: date


def _year_range():
    return (
        getattr(settings, 'UID_MIN_YEAR', 2020),
        getattr(settings, 'UID_MAX_YEAR', 2100),
    )


def format_uid(category, sequence, region, month, year):
    """Compose a user identifier, e.g. format_uid('a', 1, 'DL', 11, 2025) -> 'a00001DL112025'."""
    if not 1 <= sequence <= 99999:
        raise ValueError(f"Sequence out of range: {sequence}")
    return f"{category}{sequence:05d}{region}{month:02d}{year:04d}"


def format_event_uid(sequence, sport, region, event_date):
    """Compose an event identifier, e.g. 'EVT-0001-FB-DL-071125'."""
    if not 1 <= sequence <= 9999:
        raise ValueError(f"Sequence out of range: {sequence}")
    return f"{EVENT_PREFIX}-{sequence:04d}-{sport}-{region}-{event_date:%d%m%y}"


def check_issue_year(year, event=False):
    """
    Raise ValueError unless an identifier dated in year would validate.
    Event identifiers carry a two-digit year, so they are limited to 2000-2099.
    """
    min_year, max_year = _year_range()
    if event:
        min_year, max_year = max(min_year, 2000), min(max_year, 2099)
    if not min_year <= year <= max_year:
        raise ValueError(f"Year {year} outside {min_year}-{max_year}")


def _check_year(identifier, year):
    min_year, max_year = _year_range()
    if not min_year <= year <= max_year:
        raise MalformedIdentifier(identifier, f"year {year} outside {min_year}-{max_year}")


def parse_uid(identifier):
    """
    Split a user identifier into its components.
    Raises MalformedIdentifier if the string is not a valid identifier.
    """
    if not isinstance(identifier, str):
        raise MalformedIdentifier(identifier, "not a string")
    match = USER_UID_RE.fullmatch(identifier)
    if not match:
        raise MalformedIdentifier(identifier, f"expected {USER_UID_LENGTH} characters like a00001DL112025")

    category, sequence, region, month, year = match.groups()
    if category not in CATEGORY_CODES.values():
        raise MalformedIdentifier(identifier, f"unknown category code {category!r}")
    if int(sequence) == 0:
        raise MalformedIdentifier(identifier, "sequence must start at 00001")
    if not 1 <= int(month) <= 12:
        raise MalformedIdentifier(identifier, f"month {month} out of range")
    _check_year(identifier, int(year))

    return UIDComponents(category, int(sequence), region, int(month), int(year))


def parse_event_uid(identifier):
    """Split an event identifier into its components."""
    if not isinstance(identifier, str):
        raise MalformedIdentifier(identifier, "not a string")
    match = EVENT_UID_RE.fullmatch(identifier)
    if not match:
        raise MalformedIdentifier(identifier, "expected an event ID like EVT-0001-FB-DL-071125")

    sequence, sport, region, day, month, yy = match.groups()
    if int(sequence) == 0:
        raise MalformedIdentifier(identifier, "sequence must start at 0001")
    try:
        event_date = date(2000 + int(yy), int(month), int(day))
    except ValueError:
        raise MalformedIdentifier(identifier, f"{day}{month}{yy} is not a valid date")
    _check_year(identifier, event_date.year)

    return EventUIDComponents(int(sequence), sport, region, event_date)


def validate_uid(identifier):
    """
    Validate a user identifier. Never raises.

    Returns:
        dict: {'valid': True, 'components': UIDComponents} or
              {'valid': False, 'error': str}
    """
    try:
        return {'valid': True, 'components': parse_uid(identifier)}
    except MalformedIdentifier as e:
        return {'valid': False, 'error': e.reason}


def validate_event_uid(identifier):
    """Validate an event identifier. Never raises."""
    try:
        return {'valid': True, 'components': parse_event_uid(identifier)}
    except MalformedIdentifier as e:
        return {'valid': False, 'error': e.reason}


def format_uid_for_display(identifier):
    """
    a00001DL112025 -> a-00001-DL-11-2025
    Anything that is not 14 characters long is returned unchanged.
    """
    if not isinstance(identifier, str) or len(identifier) != USER_UID_LENGTH:
        return identifier
    return '-'.join((
        identifier[0],
        identifier[1:6],
        identifier[6:8],
        identifier[8:10],
        identifier[10:14],
    ))


def normalize_display_uid(value):
    """Reverse of format_uid_for_display; other input is returned stripped."""
    value = (value or '').strip()
    if DISPLAY_UID_RE.fullmatch(value):
        return value.replace('-', '')
    return value
