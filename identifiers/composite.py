"""
Identifiers for certificates and event orders.

They are the concatenation of two identifiers that are already unique, so
no sequence is allocated for them:

    STAIRS-CERT-<event UID>-<student UID>
    EVT-ORDR-<event UID>-<coach UID>
"""
from django.conf import settings

from .codes import CERTIFICATE_PREFIX, ORDER_PREFIX
from .exceptions import MalformedIdentifier
from .formats import EVENT_UID_LENGTH, parse_event_uid, parse_uid


def _certificate_prefix():
    return getattr(settings, 'UID_CERTIFICATE_PREFIX', CERTIFICATE_PREFIX)


def _order_prefix():
    return getattr(settings, 'UID_ORDER_PREFIX', ORDER_PREFIX)


def build_certificate_identifier(event_id, student_id):
    return f"{_certificate_prefix()}-{event_id}-{student_id}"


def build_order_identifier(event_id, coach_id):
    return f"{_order_prefix()}-{event_id}-{coach_id}"


def split_composite_identifier(identifier):
    """
    Split a certificate or order identifier back into its parents.

    Returns:
        tuple: (kind, event_id, user_id), kind being 'certificate' or 'order'

    Raises:
        MalformedIdentifier: unknown prefix, or a parent that does not parse
    """
    if not isinstance(identifier, str):
        raise MalformedIdentifier(identifier, "not a string")

    for kind, prefix in (('certificate', _certificate_prefix()), ('order', _order_prefix())):
        head = f"{prefix}-"
        if not identifier.startswith(head):
            continue
        rest = identifier[len(head):]
        event_id = rest[:EVENT_UID_LENGTH]
        if rest[EVENT_UID_LENGTH:EVENT_UID_LENGTH + 1] != '-':
            raise MalformedIdentifier(identifier, "missing separator after event ID")
        user_id = rest[EVENT_UID_LENGTH + 1:]
        # Both parents must be well formed for the composite to be
        parse_event_uid(event_id)
        parse_uid(user_id)
        return kind, event_id, user_id

    raise MalformedIdentifier(identifier, "not a certificate or order identifier")
