"""
Unit tests for status classification.
"""

import pytest

from certverify.modules.students.models import GraduationStatus
from certverify.modules.verification.helpers import (
    REVOKED_WARNING,
    STATUS_PRESENTATIONS,
    UNKNOWN_PRESENTATION,
    classify_status,
    parse_status,
    status_value,
)
from certverify.modules.verification.schemas import StatusTone

MESSAGE = "This confirms that the above student successfully graduated from ALHIDAYA CENTRE."


class TestClassifyStatus:
    """Tests for classify_status."""

    def test_graduated_shows_verification_message(self):
        result = classify_status(GraduationStatus.GRADUATED, MESSAGE)

        assert result.label == "Graduated"
        assert result.tone == StatusTone.SUCCESS
        assert result.message == MESSAGE

    def test_revoked_shows_fixed_warning(self):
        result = classify_status(GraduationStatus.REVOKED, "anything at all")

        assert result.label == "Revoked"
        assert result.tone == StatusTone.DANGER
        assert result.message == REVOKED_WARNING

    def test_pending_has_no_message(self):
        result = classify_status(GraduationStatus.PENDING, MESSAGE)

        assert result.label == "Pending"
        assert result.tone == StatusTone.WARNING
        assert result.message is None

    @pytest.mark.parametrize("status", ["expelled", "", None, "GRADUATED"])
    def test_other_values_are_unknown(self, status):
        result = classify_status(status, MESSAGE)

        assert result == UNKNOWN_PRESENTATION
        assert result.tone == StatusTone.NEUTRAL
        assert result.message is None

    def test_plain_string_status_is_classified(self):
        assert classify_status("graduated", MESSAGE).label == "Graduated"
        assert classify_status("revoked", MESSAGE).label == "Revoked"

    def test_classification_does_not_mutate_table(self):
        classify_status(GraduationStatus.GRADUATED, "first")

        assert STATUS_PRESENTATIONS[GraduationStatus.GRADUATED].message is None

    def test_every_status_has_a_presentation(self):
        for status in GraduationStatus:
            assert status in STATUS_PRESENTATIONS


class TestStatusParsing:
    """Tests for parse_status and status_value."""

    def test_parse_known_value(self):
        assert parse_status("pending") is GraduationStatus.PENDING

    def test_parse_unknown_value(self):
        assert parse_status("unknown-status") is None

    def test_status_value(self):
        assert status_value(GraduationStatus.REVOKED) == "revoked"
        assert status_value("custom") == "custom"
        assert status_value(None) == ""
