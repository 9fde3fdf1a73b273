from __future__ import annotations

import logging
import threading
from typing import Optional

from marketadmin.models.listing import Listing
from marketadmin.models.profile import Profile
from marketadmin.utils.email import is_email_enabled, send_email

logger = logging.getLogger(__name__)


EMAIL_SUBJECT_BY_EVENT = {
    "user_warned": "You have received a warning",
    "listing_removed": "Your listing has been removed",
}


def _deliver(to_email: str, subject: str, body_text: str, *, event_type: str, user_id: Optional[str]) -> None:
    """Runs on a daemon thread so the admin's request is not held up by SMTP."""
    sent = send_email(to_email=to_email, subject=subject, body_text=body_text)
    if not sent:
        logger.info("Notification email not sent (event=%s, user_id=%s)", event_type, user_id)


def _dispatch(recipient: Optional[Profile], event_type: str, body_text: str) -> bool:
    """
    Best-effort delivery after the moderation action has been committed.
    Never raises; returns whether a send was started.
    """
    try:
        if not is_email_enabled():
            return False
        if recipient is None or not recipient.email:
            return False

        name = (recipient.display_name or "there").strip() or "there"
        worker = threading.Thread(
            target=_deliver,
            args=(
                recipient.email,
                EMAIL_SUBJECT_BY_EVENT[event_type],
                f"Hi {name},\n\n{body_text}\n",
            ),
            kwargs={"event_type": event_type, "user_id": recipient.id},
            daemon=True,
        )
        worker.start()
        return True
    except Exception as exc:
        logger.warning(
            "Notification dispatch failed (event=%s, user_id=%s): %s",
            event_type,
            getattr(recipient, "id", None),
            exc,
        )
        return False


def notify_user_warned(profile: Profile, message: str) -> bool:
    body = (
        "A marketplace moderator has issued a warning on your account:\n\n"
        f"{message}\n\n"
        f"Warnings on record: {profile.warning_count}"
    )
    return _dispatch(profile, "user_warned", body)


def notify_listing_removed(listing: Listing, reason: str) -> bool:
    body = (
        f'Your listing "{listing.title}" (#{listing.id}) was removed by a moderator.\n\n'
        f"Reason: {reason}"
    )
    return _dispatch(listing.seller, "listing_removed", body)
