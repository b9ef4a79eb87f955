"""Tests for the pure booking lifecycle: guards, transitions, payloads and date checks."""

from datetime import date, datetime, timedelta, timezone

import pytest
from conftest import make_booking

from rentverse.models import BookingStatus
from rentverse.services.booking_service import (
    DEFAULT_CANCEL_REASON,
    apply_approval,
    apply_cancellation,
    apply_rejection,
    can_approve,
    can_cancel,
    can_reject,
    create_booking_payload,
    tenant_display_status,
    validate_booking_dates,
)

NOW = "2026-01-15T10:30:00.000Z"
NOT_PENDING = [s for s in BookingStatus if s != BookingStatus.PENDING]


def _unchanged_fields(before, after, *changed):
    skip = {"updated_at", *changed}
    return {
        name: (getattr(before, name), getattr(after, name))
        for name in type(before).model_fields
        if name not in skip and getattr(before, name) != getattr(after, name)
    }


class TestGuards:
    def test_only_pending_can_be_decided(self):
        assert can_approve(make_booking()) is True
        assert can_reject(make_booking()) is True
        for status in NOT_PENDING:
            booking = make_booking(status=status)
            assert can_approve(booking) is False
            assert can_reject(booking) is False

    @pytest.mark.parametrize("status", ["PENDING", "APPROVED", "ACTIVE"])
    def test_non_terminal_bookings_can_be_cancelled(self, status):
        assert can_cancel(make_booking(status=status)) is True

    @pytest.mark.parametrize("status", ["REJECTED", "CANCELLED", "COMPLETED"])
    def test_terminal_bookings_cannot_be_cancelled(self, status):
        assert can_cancel(make_booking(status=status)) is False

    def test_tenant_can_only_cancel_own_booking(self):
        booking = make_booking(tenant_id="tenant-1")
        assert can_cancel(booking, tenant_id="tenant-1") is True
        assert can_cancel(booking, tenant_id="tenant-2") is False


class TestApproval:
    def test_pending_becomes_approved(self):
        booking = make_booking(notes="Looking forward")
        approved = apply_approval(booking, now=NOW)

        assert approved.status == BookingStatus.APPROVED
        assert approved.updated_at == NOW
        assert _unchanged_fields(booking, approved, "status") == {}

    def test_input_is_not_mutated(self):
        booking = make_booking()
        apply_approval(booking, now=NOW)
        assert booking.status == BookingStatus.PENDING
        assert booking.updated_at == "2025-12-01T08:00:00.000Z"

    def test_updated_at_is_refreshed_without_explicit_now(self):
        approved = apply_approval(make_booking())
        assert approved.updated_at != "2025-12-01T08:00:00.000Z"
        assert approved.updated_at.endswith("Z")

    @pytest.mark.parametrize("status", NOT_PENDING)
    def test_identity_when_not_pending(self, status):
        booking = make_booking(status=status)
        assert apply_approval(booking, now=NOW) is booking

    def test_reapplying_is_a_no_op(self):
        approved = apply_approval(make_booking(), now=NOW)
        assert apply_approval(approved, now="2030-01-01T00:00:00.000Z") is approved


class TestRejection:
    def test_rejection_with_reason(self):
        booking = make_booking(notes=None)
        rejected = apply_rejection(booking, "too noisy", now=NOW)

        assert rejected.status == BookingStatus.REJECTED
        assert rejected.notes == "too noisy"
        assert rejected.updated_at == NOW
        assert _unchanged_fields(booking, rejected, "status", "notes") == {}

    def test_rejection_without_reason_keeps_notes(self):
        rejected = apply_rejection(make_booking(notes="Will bring a cat"), now=NOW)
        assert rejected.status == BookingStatus.REJECTED
        assert rejected.notes == "Will bring a cat"

    @pytest.mark.parametrize("status", NOT_PENDING)
    @pytest.mark.parametrize("reason", [None, "", "too noisy"])
    def test_identity_when_not_pending(self, status, reason):
        booking = make_booking(status=status)
        assert apply_rejection(booking, reason, now=NOW) is booking


class TestCancellation:
    def test_pending_request_is_withdrawn_as_rejected(self):
        cancelled = apply_cancellation(make_booking(), now=NOW)
        assert cancelled.status == BookingStatus.REJECTED
        assert cancelled.notes == DEFAULT_CANCEL_REASON
        assert cancelled.updated_at == NOW

    def test_pending_withdrawal_uses_given_reason(self):
        cancelled = apply_cancellation(make_booking(), reason="Found another place", now=NOW)
        assert cancelled.notes == "Found another place"

    @pytest.mark.parametrize("status", ["APPROVED", "ACTIVE"])
    def test_approved_or_active_becomes_cancelled(self, status):
        booking = make_booking(status=status, notes="Keep")
        cancelled = apply_cancellation(booking, now=NOW)
        assert cancelled.status == BookingStatus.CANCELLED
        assert cancelled.notes == "Keep"

    @pytest.mark.parametrize("status", ["REJECTED", "CANCELLED", "COMPLETED"])
    def test_terminal_is_identity(self, status):
        booking = make_booking(status=status)
        assert apply_cancellation(booking, now=NOW) is booking

    def test_other_tenant_cannot_cancel(self):
        booking = make_booking()
        assert apply_cancellation(booking, tenant_id="someone-else", now=NOW) is booking

    def test_tenant_sees_withdrawn_request_as_cancelled(self):
        withdrawn = apply_cancellation(make_booking(), now=NOW)
        assert tenant_display_status(withdrawn) == BookingStatus.CANCELLED
        assert tenant_display_status(make_booking(status="APPROVED")) == BookingStatus.APPROVED


class TestCreateBookingPayload:
    def test_dates_are_serialized_to_iso(self):
        payload = create_booking_payload("property-1", date(2026, 3, 1), date(2026, 9, 1))
        assert payload.to_wire() == {
            "propertyId": "property-1",
            "startDate": "2026-03-01T00:00:00.000Z",
            "endDate": "2026-09-01T00:00:00.000Z",
        }

    @pytest.mark.parametrize("message", [None, ""])
    def test_absent_message_is_omitted(self, message):
        payload = create_booking_payload("p", date(2026, 3, 1), date(2026, 4, 1), message)
        assert "message" not in payload.to_wire()

    def test_message_is_sent_when_given(self):
        payload = create_booking_payload("p", date(2026, 3, 1), date(2026, 4, 1), "Can I view it first?")
        assert payload.to_wire()["message"] == "Can I view it first?"

    def test_aware_datetimes_are_converted_to_utc(self):
        start = datetime(2026, 3, 1, 8, 0, tzinfo=timezone(timedelta(hours=8)))
        payload = create_booking_payload("p", start, start + timedelta(days=30))
        assert payload.start_date == "2026-03-01T00:00:00.000Z"


class TestValidateBookingDates:
    TODAY = date(2026, 1, 15)

    def test_start_in_the_past(self):
        yesterday = self.TODAY - timedelta(days=1)
        next_week = self.TODAY + timedelta(days=7)
        result = validate_booking_dates(yesterday, next_week, today=self.TODAY)
        assert result.is_valid is False
        assert "past" in result.error

    def test_start_today_is_allowed(self):
        result = validate_booking_dates(self.TODAY, self.TODAY + timedelta(days=30), today=self.TODAY)
        assert result.is_valid is True
        assert result.error is None

    def test_later_today_is_allowed(self):
        start = datetime(2026, 1, 15, 18, 0)
        result = validate_booking_dates(start, start + timedelta(days=1), today=self.TODAY)
        assert result.is_valid is True

    def test_offset_start_later_today_is_allowed(self):
        start = datetime(2026, 1, 15, 7, 30, tzinfo=timezone(timedelta(hours=8)))
        result = validate_booking_dates(start, start + timedelta(days=7), today=self.TODAY)
        assert result.is_valid is True

    def test_offset_start_before_midnight_in_its_own_offset(self):
        start = datetime(2026, 1, 14, 23, 30, tzinfo=timezone(timedelta(hours=8)))
        result = validate_booking_dates(start, start + timedelta(days=7), today=self.TODAY)
        assert result.error == "Start date cannot be in the past"

    def test_naive_end_is_read_in_the_start_offset(self):
        start = datetime(2026, 1, 15, 9, 0, tzinfo=timezone(timedelta(hours=8)))
        assert validate_booking_dates(start, datetime(2026, 1, 15, 8, 0), today=self.TODAY).is_valid is False
        assert validate_booking_dates(start, date(2026, 1, 16), today=self.TODAY).is_valid is True

    def test_equal_dates_are_invalid(self):
        day = self.TODAY + timedelta(days=3)
        result = validate_booking_dates(day, day, today=self.TODAY)
        assert result.is_valid is False
        assert result.error == "End date must be after start date"

    def test_end_before_start(self):
        result = validate_booking_dates(
            self.TODAY + timedelta(days=10), self.TODAY + timedelta(days=5), today=self.TODAY
        )
        assert result.is_valid is False
        assert result.error == "End date must be after start date"

    def test_defaults_to_the_real_today(self):
        result = validate_booking_dates(date.today() - timedelta(days=1), date.today() + timedelta(days=7))
        assert result.error == "Start date cannot be in the past"
