"""Friend requests and leaderboard entries."""

from dataclasses import dataclass
from datetime import datetime

from .character import CharacterClass


@dataclass
class FriendRequest:
    """A pending request from sender to recipient."""

    sender_id: int
    recipient_id: int
    id: int | None = None
    created_at: datetime | None = None

    def involves(self, a: int, b: int) -> bool:
        """Whether the request is between a and b, in either direction."""
        return {self.sender_id, self.recipient_id} == {a, b}

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "sender_id": self.sender_id,
            "recipient_id": self.recipient_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass
class LeaderboardEntry:
    """Public ranking row for one character."""

    rank: int
    character_id: int
    username: str
    character_class: CharacterClass
    level: int
    experience_leftover: int
    experience_needed: int

    def to_dict(self) -> dict:
        return {
            "rank": self.rank,
            "character_id": self.character_id,
            "username": self.username,
            "class": self.character_class.to_dict(),
            "level": self.level,
            "experience_leftover": self.experience_leftover,
            "experience_needed": self.experience_needed,
        }
