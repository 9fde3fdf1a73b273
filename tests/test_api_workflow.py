# tests/test_api_workflow.py
"""
HTTP-level checks: bearer-token identity, permission dependencies, error
mapping and request validation.
"""

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from marketadmin.database import get_db
from marketadmin.main import app
from marketadmin.models import AdminRole, AuditLogEntry, ModerationStatus
from marketadmin.utils.security import create_access_token

from factories import make_admin, make_listing, make_profile, make_report


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth_header(admin):
    return {"Authorization": f"Bearer {create_access_token({'sub': admin.user_id})}"}


# ======================
# IDENTITY
# ======================

def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"


def test_missing_token_is_401(client):
    response = client.get("/auth/me")
    assert response.status_code == 401


def test_garbage_token_is_401(client):
    response = client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


def test_expired_token_is_401(client, db_session):
    admin = make_admin(db_session, AdminRole.ADMIN)
    token = create_access_token({"sub": admin.user_id}, expires_delta=timedelta(minutes=-5))

    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


def test_token_without_admin_row_is_403(client):
    token = create_access_token({"sub": "some-shopper"})
    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403


def test_inactive_admin_is_403(client, db_session):
    admin = make_admin(db_session, AdminRole.ADMIN, is_active=False)
    response = client.get("/auth/me", headers=auth_header(admin))
    assert response.status_code == 403


def test_me_lists_role_permissions(client, db_session):
    moderator = make_admin(db_session, AdminRole.MODERATOR)

    body = client.get("/auth/me", headers=auth_header(moderator)).json()

    assert body["role"] == "moderator"
    assert body["admin_id"] == moderator.id
    assert set(body["permissions"]) == {
        "view_reports", "dismiss_reports", "warn_users", "remove_listings",
    }


# ======================
# PERMISSIONS
# ======================

def test_moderator_cannot_ban(client, db_session):
    moderator = make_admin(db_session, AdminRole.MODERATOR)
    profile = make_profile(db_session)

    response = client.post(
        f"/users/{profile.id}/ban",
        json={"reason": "fraud"},
        headers=auth_header(moderator),
    )

    assert response.status_code == 403
    db_session.refresh(profile)
    assert profile.moderation_status == ModerationStatus.ACTIVE


def test_admin_can_ban_and_ip_is_audited(client, db_session):
    admin = make_admin(db_session, AdminRole.ADMIN)
    profile = make_profile(db_session)

    response = client.post(
        f"/users/{profile.id}/ban",
        json={"reason": "fraud"},
        headers={**auth_header(admin), "X-Forwarded-For": "198.51.100.4, 10.0.0.1"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "banned"
    entry = db_session.query(AuditLogEntry).filter(AuditLogEntry.id == body["audit_log_id"]).one()
    assert entry.admin_id == admin.id
    assert entry.ip_address == "198.51.100.4"


def test_settings_require_super_admin(client, db_session):
    admin = make_admin(db_session, AdminRole.ADMIN)
    owner = make_admin(db_session, AdminRole.SUPER_ADMIN)

    assert client.get("/settings", headers=auth_header(admin)).status_code == 403
    response = client.get("/settings", headers=auth_header(owner))
    assert response.status_code == 200
    assert response.json()["warning_threshold"] == 3
    assert "secret_key" not in {key.lower() for key in response.json()}


def test_audit_log_hidden_from_moderators(client, db_session):
    moderator = make_admin(db_session, AdminRole.MODERATOR)
    assert client.get("/audit-log", headers=auth_header(moderator)).status_code == 403


# ======================
# REPORTS
# ======================

def test_report_resolution_names_report_and_target(client, db_session):
    moderator = make_admin(db_session, AdminRole.MODERATOR)
    reporter = make_profile(db_session)
    target = make_profile(db_session)
    report = make_report(db_session, reporter, user=target)

    response = client.post(
        f"/reports/{report.id}/resolve/warn",
        json={"message": "Keep payments on the platform"},
        headers=auth_header(moderator),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["target_type"] == "user"
    assert body["target_id"] == target.id
    assert body["report_id"] == report.id
    assert body["status"] == "resolved"


def test_report_dismissal_carries_report_id(client, db_session):
    moderator = make_admin(db_session, AdminRole.MODERATOR)
    report = make_report(db_session, make_profile(db_session), user=make_profile(db_session))

    body = client.post(f"/reports/{report.id}/dismiss", json={}, headers=auth_header(moderator)).json()

    assert body["target_type"] == "report"
    assert body["target_id"] == report.id
    assert body["report_id"] == report.id


# ======================
# ERROR MAPPING
# ======================

def test_second_resolution_is_409(client, db_session):
    moderator = make_admin(db_session, AdminRole.MODERATOR)
    reporter = make_profile(db_session)
    target = make_profile(db_session)
    report = make_report(db_session, reporter, user=target)

    first = client.post(f"/reports/{report.id}/dismiss", json={}, headers=auth_header(moderator))
    second = client.post(
        f"/reports/{report.id}/resolve/warn",
        json={"message": "too late"},
        headers=auth_header(moderator),
    )

    assert first.status_code == 200
    assert first.json()["status"] == "dismissed"
    assert second.status_code == 409


def test_unknown_user_is_404(client, db_session):
    admin = make_admin(db_session, AdminRole.ADMIN)
    response = client.post(
        "/users/nobody/suspend",
        json={"duration": "3_days", "reason": "spam"},
        headers=auth_header(admin),
    )
    assert response.status_code == 404


def test_blank_reason_is_422(client, db_session):
    admin = make_admin(db_session, AdminRole.ADMIN)
    profile = make_profile(db_session)

    response = client.post(
        f"/users/{profile.id}/ban",
        json={"reason": "   "},
        headers=auth_header(admin),
    )

    assert response.status_code == 422


def test_bad_filter_value_is_422(client, db_session):
    admin = make_admin(db_session, AdminRole.ADMIN)
    response = client.get("/users", params={"listings_count": "lots"}, headers=auth_header(admin))
    assert response.status_code == 422


def test_user_list_pagination_envelope(client, db_session):
    admin = make_admin(db_session, AdminRole.MODERATOR)
    for _ in range(3):
        make_profile(db_session)

    body = client.get(
        "/users",
        params={"page": 0, "page_size": 2, "email_verified": "all"},
        headers=auth_header(admin),
    ).json()

    assert body["total"] == 3
    assert len(body["items"]) == 2
    assert body["next_page"] == 1
    assert "listings_count" in body["items"][0]


def test_bulk_approve_endpoint(client, db_session):
    moderator = make_admin(db_session, AdminRole.MODERATOR)
    seller = make_profile(db_session)
    ids = [make_listing(db_session, seller).id for _ in range(2)]

    response = client.post(
        "/listings/bulk/approve",
        json={"listing_ids": ids},
        headers=auth_header(moderator),
    )

    assert response.status_code == 200
    assert response.json()["audit_entries"] == 2
    assert response.json()["moderation_status"] == "approved"
