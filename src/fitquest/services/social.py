"""Friend requests, friendships and the leaderboard."""

import logging

import aiosqlite

from ..config import settings
from ..db.engine import Database
from ..db.repositories import CharacterRepository, FriendRequestRepository
from ..exceptions import (
    AlreadyFriendsError,
    FriendRequestForbiddenError,
    FriendRequestNotFoundError,
    FriendRequestPendingError,
    InvalidAmountError,
    NotFriendsError,
    RecipientNotFoundError,
    SelfFriendRequestError,
)
from ..models.character import Character
from ..models.social import FriendRequest, LeaderboardEntry
from .progression import experience_required

logger = logging.getLogger(__name__)


class SocialService:
    """Manages the friend graph.

    Friendship is symmetric: whenever one character lists another as a
    friend, the other lists it back. Both sides are always written in the
    same transaction.
    """

    def __init__(self, database: Database):
        self.database = database

    async def send_request(self, sender_id: int, recipient_id: int) -> FriendRequest:
        """Send a friend request.

        Raises:
            SelfFriendRequestError: sender and recipient are the same
            CharacterNotFoundError: the sender does not exist
            RecipientNotFoundError: the recipient does not exist
            AlreadyFriendsError: the two are already friends
            FriendRequestPendingError: a request exists in either direction
        """
        if sender_id == recipient_id:
            raise SelfFriendRequestError(sender_id)

        async def work(db: aiosqlite.Connection) -> FriendRequest:
            characters = CharacterRepository(db)
            requests = FriendRequestRepository(db)

            sender = await characters.require(sender_id)
            if await characters.get(recipient_id) is None:
                raise RecipientNotFoundError(recipient_id)
            if sender.is_friend(recipient_id):
                raise AlreadyFriendsError(sender_id, recipient_id)
            if await requests.find_between(sender_id, recipient_id) is not None:
                raise FriendRequestPendingError(sender_id, recipient_id)

            request_id = await requests.create(sender_id, recipient_id)
            return await requests.get(request_id)

        request = await self.database.run_in_transaction(work)
        logger.info("Character %s sent friend request %s to %s", sender_id, request.id, recipient_id)
        return request

    async def respond(self, request_id: int, responder_id: int, accept: bool) -> FriendRequest:
        """Accept or decline a friend request addressed to `responder_id`.

        The request is deleted either way. A request can only be answered
        once; answering it again raises FriendRequestNotFoundError.
        """

        async def work(db: aiosqlite.Connection) -> FriendRequest:
            characters = CharacterRepository(db)
            requests = FriendRequestRepository(db)

            request = await requests.get(request_id)
            if request is None:
                raise FriendRequestNotFoundError(request_id)
            if request.recipient_id != responder_id:
                raise FriendRequestForbiddenError(request_id, responder_id)

            await requests.delete(request_id)

            if accept:
                sender = await characters.require(request.sender_id)
                recipient = await characters.require(request.recipient_id)
                if sender.add_friend(recipient.id):
                    await characters.update(sender)
                if recipient.add_friend(sender.id):
                    await characters.update(recipient)
            return request

        request = await self.database.run_in_transaction(work)
        logger.info(
            "Friend request %s from %s %s by %s",
            request_id,
            request.sender_id,
            "accepted" if accept else "declined",
            responder_id,
        )
        return request

    async def remove_friend(self, character_id: int, friend_id: int) -> None:
        """End a friendship on both sides."""

        async def work(db: aiosqlite.Connection) -> None:
            characters = CharacterRepository(db)
            character = await characters.require(character_id)
            if not character.remove_friend(friend_id):
                raise NotFriendsError(character_id, friend_id)
            await characters.update(character)

            friend = await characters.get(friend_id)
            if friend is not None and friend.remove_friend(character_id):
                await characters.update(friend)

        await self.database.run_in_transaction(work)
        logger.info("Characters %s and %s are no longer friends", character_id, friend_id)

    async def pending_requests(self, character_id: int) -> list[FriendRequest]:
        """Requests waiting for `character_id` to answer."""
        async with self.database.snapshot() as db:
            await CharacterRepository(db).require(character_id)
            return await FriendRequestRepository(db).list_for_recipient(character_id)

    async def list_friends(self, character_id: int) -> list[Character]:
        """Friends of `character_id`, read from one consistent snapshot."""
        async with self.database.snapshot() as db:
            characters = CharacterRepository(db)
            character = await characters.require(character_id)
            return await characters.get_many(character.friends)

    async def friend_detail(self, viewer_id: int, friend_id: int) -> Character:
        """Full character view of a friend. Non-friends are not visible."""
        async with self.database.snapshot() as db:
            characters = CharacterRepository(db)
            viewer = await characters.require(viewer_id)
            if not viewer.is_friend(friend_id):
                raise NotFriendsError(viewer_id, friend_id)
            return await characters.require(friend_id)

    async def leaderboard(self, limit: int | None = None) -> list[LeaderboardEntry]:
        """Top characters by level, then experience, then age.

        Args:
            limit: Maximum number of entries (defaults to settings.leaderboard_limit)

        Raises:
            InvalidAmountError: limit is negative
        """
        if limit is None:
            limit = settings.leaderboard_limit
        if limit < 0:
            raise InvalidAmountError(limit, what="limit")

        async with self.database.connect() as db:
            ranked = await CharacterRepository(db).top_by_level(limit)

        return [
            LeaderboardEntry(
                rank=rank,
                character_id=character.id,
                username=character.username,
                character_class=character.character_class,
                level=character.level,
                experience_leftover=character.experience_leftover,
                experience_needed=experience_required(character.level),
            )
            for rank, character in enumerate(ranked, start=1)
        ]
