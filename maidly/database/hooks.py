"""
maidly/database/hooks.py

Transaction hooks executed inside the same flush as the triggering write:
- Profile provisioning: every newly added Identity gets exactly one Profile,
  copying email, full name and phone out of the signup metadata
- Timestamp stamping: every modified Profile, Maid or Job gets
  `updated_at` set to the current time, overriding any caller value

Both hooks are `before_flush` listeners on the Session class, so they apply
to every session (sync or the sync core of an AsyncSession) and commit or
roll back together with the write that fired them.
"""

import logging
import uuid
from typing import Any

from sqlalchemy import event
from sqlalchemy.orm import Session

from maidly.database.base import utcnow
from maidly.database.models import Identity, Job, Maid, Profile

logger = logging.getLogger(__name__)

TIMESTAMPED_MODELS = (Profile, Maid, Job)


def build_profile(identity: Identity) -> Profile:
    """Materialize the profile row for a freshly created identity."""
    metadata = identity.user_metadata or {}
    full_name = metadata.get("full_name")
    return Profile(
        id=identity.id,
        email=identity.email,
        full_name=full_name if full_name is not None else "",
        phone=metadata.get("phone"),
    )


@event.listens_for(Session, "before_flush")
def provision_profiles(session: Session, flush_context: Any, instances: Any) -> None:
    """Add a Profile for every Identity pending insert in this flush."""
    for obj in list(session.new):
        if not isinstance(obj, Identity):
            continue
        if obj.id is None:
            obj.id = uuid.uuid4()
        if "profile" in obj.__dict__ and obj.__dict__["profile"] is not None:
            continue
        profile = build_profile(obj)
        obj.profile = profile
        session.add(profile)
        logger.info(f"[HOOK] Provisioned profile for identity {obj.id}")


@event.listens_for(Session, "before_flush")
def stamp_updated_at(session: Session, flush_context: Any, instances: Any) -> None:
    """Overwrite `updated_at` on every modified timestamped row."""
    now = utcnow()
    for obj in session.dirty:
        if isinstance(obj, TIMESTAMPED_MODELS) and session.is_modified(obj):
            obj.updated_at = now
