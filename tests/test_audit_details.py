from datetime import datetime

import pytest
from pydantic import ValidationError

from marketadmin.models import AdminRole
from marketadmin.schemas.audit import (
    AdminUpdatedDetails,
    AuditLogRead,
    ListingApprovedDetails,
    ListingRemovedDetails,
    UserSuspendedDetails,
    UserWarnedDetails,
    parse_details,
)


def test_record_drops_action_and_empty_fields():
    details = ListingApprovedDetails(listing_id=5)

    assert details.to_record() == {"listing_id": 5}


def test_record_serializes_datetimes_and_enums():
    details = UserSuspendedDetails(
        duration="custom",
        custom_days=10,
        days=10,
        suspension_until=datetime(2026, 5, 1, 9, 30),
        reason="spam",
    )
    admin_details = AdminUpdatedDetails(user_id="u1", new_role=AdminRole.ADMIN)

    assert details.to_record()["suspension_until"] == "2026-05-01T09:30:00"
    assert admin_details.to_record() == {"user_id": "u1", "new_role": "admin"}


def test_extra_payload_is_kept_only_when_present():
    details = ListingRemovedDetails(listing_id=1, reason="spam", extra={"ticket": "T-9"})

    assert details.to_record()["extra"] == {"ticket": "T-9"}


def test_writers_must_use_extra_for_undeclared_fields():
    with pytest.raises(ValidationError):
        ListingApprovedDetails(listing_id=1, colour="red")


def test_parse_details_picks_model_by_action():
    parsed = parse_details("listing_removed", {"listing_id": 3, "reason": "fake", "report_id": "r1"})

    assert isinstance(parsed, ListingRemovedDetails)
    assert parsed.report_id == "r1"
    assert parsed.extra == {}


def test_parse_details_moves_unknown_stored_keys_into_extra():
    parsed = parse_details(
        "user_warned",
        {"message": "m", "new_warning_count": 1, "channel": "sms", "extra": {"ticket": "T-1"}},
    )

    assert isinstance(parsed, UserWarnedDetails)
    assert parsed.message == "m"
    assert parsed.extra == {"ticket": "T-1", "channel": "sms"}


def test_parse_details_unknown_action_or_bad_payload():
    assert parse_details("listing_teleported", {"listing_id": 3}) is None
    assert parse_details("listing_removed", {"listing_id": "not-a-number", "reason": "x"}) is None
    assert parse_details("listing_removed", {"reason": "missing id"}) is None


def test_parse_details_tolerates_missing_record():
    parsed = parse_details("warnings_reset", None)

    assert parsed.previous_warning_count is None


def test_audit_read_exposes_parsed_details():
    read = AuditLogRead(
        id="a1",
        admin_id="admin-1",
        action="user_warned",
        target_type="user",
        target_id="u1",
        details={"message": "Be nice", "new_warning_count": 2, "source": "mobile"},
        created_at=datetime(2026, 5, 1),
    )

    assert isinstance(read.parsed_details, UserWarnedDetails)
    assert read.parsed_details.extra == {"source": "mobile"}
    assert read.model_dump(mode="json")["parsed_details"]["action"] == "user_warned"


def test_audit_read_keeps_raw_details_for_unknown_action():
    read = AuditLogRead(
        id="a2",
        admin_id="admin-1",
        action="listing_featured",
        target_type="listing",
        target_id="9",
        details={"slot": 1},
        created_at=datetime(2026, 5, 1),
    )

    assert read.parsed_details is None
    assert read.details == {"slot": 1}
