"""User profile summary built from a user's sightings."""

from __future__ import annotations

from collections import Counter

from parkwatch.schemas.wildlife import Sighting, User, UserProfile

RECENT_LIMIT = 5


def build_profile(user: User, sightings: list[Sighting]) -> UserProfile:
    """
    Summarise ``user``'s reports.

    ``sightings`` is the full newest-first list; only the user's own
    reports are counted.
    """
    own = [s for s in sightings if s.reporter_id == user.id]
    verified = sum(1 for s in own if s.verified)
    rate = f"{verified / len(own) * 100:.1f}" if own else "0"

    return UserProfile(
        user=user,
        recent_sightings=own[:RECENT_LIMIT],
        sightings_by_type=dict(Counter(s.type for s in own)),
        verified_sightings=verified,
        verification_rate=rate,
    )
