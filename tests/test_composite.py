"""Tests for certificate and order identifiers."""
import pytest

from identifiers.composite import (
    build_certificate_identifier, build_order_identifier, split_composite_identifier,
)
from identifiers.exceptions import MalformedIdentifier

EVENT = "EVT-0001-FB-DL-071125"
STUDENT = "a00001DL112025"
COACH = "c00001DL112025"


def test_certificate_identifier():
    assert build_certificate_identifier(EVENT, STUDENT) == (
        "STAIRS-CERT-EVT-0001-FB-DL-071125-a00001DL112025"
    )


def test_order_identifier():
    assert build_order_identifier(EVENT, COACH) == (
        "EVT-ORDR-EVT-0001-FB-DL-071125-c00001DL112025"
    )


def test_distinct_parents_give_distinct_identifiers():
    other_student = "a00002DL112025"
    assert build_certificate_identifier(EVENT, STUDENT) != build_certificate_identifier(EVENT, other_student)


def test_prefixes_follow_settings(settings):
    settings.UID_CERTIFICATE_PREFIX = "CERT"
    settings.UID_ORDER_PREFIX = "ORDR"
    assert build_certificate_identifier(EVENT, STUDENT) == f"CERT-{EVENT}-{STUDENT}"
    assert build_order_identifier(EVENT, COACH) == f"ORDR-{EVENT}-{COACH}"
    assert split_composite_identifier(f"ORDR-{EVENT}-{COACH}") == ("order", EVENT, COACH)


class TestSplitComposite:
    def test_certificate(self):
        uid = build_certificate_identifier(EVENT, STUDENT)
        assert split_composite_identifier(uid) == ("certificate", EVENT, STUDENT)

    def test_order(self):
        uid = build_order_identifier(EVENT, COACH)
        assert split_composite_identifier(uid) == ("order", EVENT, COACH)

    @pytest.mark.parametrize("uid", [
        "",
        "CERT-EVT-0001-FB-DL-071125-a00001DL112025",
        "STAIRS-CERT-EVT-0001-FB-DL-071125a00001DL112025",
        "STAIRS-CERT-EVT-0001-FB-DL-311325-a00001DL112025",
        "EVT-ORDR-EVT-0001-FB-DL-071125-c00001DL132025",
        "STAIRS-CERT-EVT-0001-FB-DL-071125-a00001DL112025\n",
        None,
    ])
    def test_malformed(self, uid):
        with pytest.raises(MalformedIdentifier):
            split_composite_identifier(uid)
