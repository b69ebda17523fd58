"""
PILOT — Parties & Friends.

A party is a proposed social event; each invited friend accepts or
declines independently and the party's overall status follows from the
invites.
"""

from __future__ import annotations

import logging
from datetime import datetime

from pilot.data.models import Friend, InviteStatus, Party, PartyInvite, PresenceStatus
from pilot.data.store import new_id

logger = logging.getLogger(__name__)


def create_party(
    title: str,
    date: str,
    time: str,
    creator: str,
    creator_id: str,
    friend_ids: list[str],
    description: str = "",
    cost: str | None = None,
    chat_id: str | None = None,
    party_id: str | None = None,
) -> Party:
    """Create a party with one pending invite per distinct friend."""
    seen: set[str] = set()
    invites: list[PartyInvite] = []
    for fid in friend_ids:
        if fid in seen or fid == creator_id:
            continue
        seen.add(fid)
        invites.append(PartyInvite(friend_id=fid))

    party = Party(
        id=party_id or new_id(),
        title=title,
        date=date,
        time=time,
        description=description,
        creator=creator,
        creator_id=creator_id,
        invites=invites,
        cost=cost,
        chat_id=chat_id,
    )
    logger.info("Party created: %s '%s' (%d invites)", party.id, title, len(invites))
    return party


def derive_party_status(party: Party) -> InviteStatus:
    """Accepted if anyone accepted, declined if everyone declined, else pending."""
    statuses = [inv.status for inv in party.invites]
    if InviteStatus.ACCEPTED in statuses:
        return InviteStatus.ACCEPTED
    if statuses and all(s is InviteStatus.DECLINED for s in statuses):
        return InviteStatus.DECLINED
    return InviteStatus.PENDING


def respond_to_invite(
    party: Party,
    friend_id: str,
    status: InviteStatus | str,
    at: datetime | None = None,
) -> PartyInvite:
    """Record a friend's answer and refresh the party status.

    Raises KeyError if the friend was not invited, ValueError when the
    answer is "pending".
    """
    status = InviteStatus(status)
    if status is InviteStatus.PENDING:
        raise ValueError("An invite response must be accepted or declined")

    for invite in party.invites:
        if invite.friend_id == friend_id:
            invite.status = status
            invite.responded_at = (at or datetime.now()).isoformat(timespec="seconds")
            party.status = derive_party_status(party)
            logger.info(
                "Party %s: %s %s (party now %s)",
                party.id, friend_id, status.value, party.status.value,
            )
            return invite
    raise KeyError(f"Friend {friend_id!r} was not invited to party {party.id!r}")


def invite_counts(party: Party) -> dict[InviteStatus, int]:
    counts = {s: 0 for s in InviteStatus}
    for invite in party.invites:
        counts[invite.status] += 1
    return counts


def online_friends(friends: list[Friend]) -> list[Friend]:
    return [f for f in friends if f.status is PresenceStatus.ONLINE]


def set_presence(friend: Friend, status: PresenceStatus | str, at: datetime | None = None) -> Friend:
    """Update a friend's presence and last activity timestamp."""
    friend.status = PresenceStatus(status)
    friend.last_activity = (at or datetime.now()).isoformat(timespec="seconds")
    return friend
