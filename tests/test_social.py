"""Tests for the friend graph and leaderboard."""

import pytest

from fitquest.exceptions import (
    AlreadyFriendsError,
    CharacterNotFoundError,
    FriendRequestForbiddenError,
    FriendRequestNotFoundError,
    FriendRequestPendingError,
    InvalidAmountError,
    NotFriendsError,
    RecipientNotFoundError,
    SelfFriendRequestError,
)
from fitquest.services.progression import experience_required
from fitquest.services.social import SocialService


@pytest.fixture
def social(database):
    return SocialService(database)


class TestSendRequest:
    """Tests for sending friend requests."""

    async def test_send_creates_pending_request(self, social, make_character):
        """Test a request shows up for the recipient."""
        alice = await make_character("alice")
        bob = await make_character("bob")

        request = await social.send_request(alice.id, bob.id)
        pending = await social.pending_requests(bob.id)

        assert [r.id for r in pending] == [request.id]
        assert pending[0].sender_id == alice.id
        assert await social.pending_requests(alice.id) == []

    async def test_self_request_rejected(self, social):
        """Test a character cannot befriend itself, even if it does not exist."""
        with pytest.raises(SelfFriendRequestError):
            await social.send_request(77, 77)

    async def test_unknown_sender(self, social, make_character):
        """Test the sender must exist."""
        bob = await make_character("bob")
        with pytest.raises(CharacterNotFoundError) as exc_info:
            await social.send_request(999, bob.id)
        assert not isinstance(exc_info.value, RecipientNotFoundError)

    async def test_unknown_recipient(self, social, make_character):
        """Test the recipient must exist."""
        alice = await make_character("alice")
        with pytest.raises(RecipientNotFoundError):
            await social.send_request(alice.id, 999)

    async def test_duplicate_in_either_direction(self, social, make_character):
        """Test only one pending request may exist per pair."""
        alice = await make_character("alice")
        bob = await make_character("bob")
        await social.send_request(alice.id, bob.id)

        with pytest.raises(FriendRequestPendingError):
            await social.send_request(alice.id, bob.id)
        with pytest.raises(FriendRequestPendingError):
            await social.send_request(bob.id, alice.id)

    async def test_already_friends(self, social, make_character):
        """Test friends cannot request each other again."""
        alice = await make_character("alice")
        bob = await make_character("bob")
        request = await social.send_request(alice.id, bob.id)
        await social.respond(request.id, bob.id, accept=True)

        with pytest.raises(AlreadyFriendsError):
            await social.send_request(bob.id, alice.id)


class TestRespond:
    """Tests for answering friend requests."""

    async def test_accept_is_symmetric(self, social, make_character, load_character):
        """Test accepting adds each party to the other's list."""
        alice = await make_character("alice")
        bob = await make_character("bob")
        request = await social.send_request(alice.id, bob.id)

        await social.respond(request.id, bob.id, accept=True)

        assert (await load_character(alice.id)).friends == [bob.id]
        assert (await load_character(bob.id)).friends == [alice.id]
        assert await social.pending_requests(bob.id) == []

    async def test_replayed_accept_adds_nothing(self, social, make_character, load_character):
        """Test a second accept fails and leaves no duplicate entries."""
        alice = await make_character("alice")
        bob = await make_character("bob")
        request = await social.send_request(alice.id, bob.id)
        await social.respond(request.id, bob.id, accept=True)

        with pytest.raises(FriendRequestNotFoundError):
            await social.respond(request.id, bob.id, accept=True)

        assert (await load_character(alice.id)).friends == [bob.id]
        assert (await load_character(bob.id)).friends == [alice.id]

    async def test_decline_deletes_without_friendship(
        self, social, make_character, load_character
    ):
        """Test declining removes the request and adds no friends."""
        alice = await make_character("alice")
        bob = await make_character("bob")
        request = await social.send_request(alice.id, bob.id)

        await social.respond(request.id, bob.id, accept=False)

        assert (await load_character(alice.id)).friends == []
        assert (await load_character(bob.id)).friends == []
        assert await social.pending_requests(bob.id) == []

    async def test_only_recipient_may_respond(self, social, make_character):
        """Test the sender or a stranger cannot answer a request."""
        alice = await make_character("alice")
        bob = await make_character("bob")
        carol = await make_character("carol")
        request = await social.send_request(alice.id, bob.id)

        with pytest.raises(FriendRequestForbiddenError):
            await social.respond(request.id, alice.id, accept=True)
        with pytest.raises(FriendRequestForbiddenError):
            await social.respond(request.id, carol.id, accept=True)
        assert len(await social.pending_requests(bob.id)) == 1

    async def test_unknown_request(self, social, make_character):
        """Test answering a request that never existed."""
        bob = await make_character("bob")
        with pytest.raises(FriendRequestNotFoundError):
            await social.respond(4242, bob.id, accept=True)


class TestFriends:
    """Tests for friend lists and removal."""

    async def _befriend(self, social, a, b):
        request = await social.send_request(a.id, b.id)
        await social.respond(request.id, b.id, accept=True)

    async def test_remove_is_symmetric(self, social, make_character, load_character):
        """Test unfriending removes both directions."""
        alice = await make_character("alice")
        bob = await make_character("bob")
        await self._befriend(social, alice, bob)

        await social.remove_friend(bob.id, alice.id)

        assert (await load_character(alice.id)).friends == []
        assert (await load_character(bob.id)).friends == []

    async def test_remove_non_friend(self, social, make_character):
        """Test removing someone not on the list."""
        alice = await make_character("alice")
        bob = await make_character("bob")
        with pytest.raises(NotFriendsError):
            await social.remove_friend(alice.id, bob.id)

    async def test_list_friends(self, social, make_character):
        """Test the friend list resolves to characters."""
        alice = await make_character("alice")
        bob = await make_character("bob")
        carol = await make_character("carol")
        await self._befriend(social, alice, bob)
        await self._befriend(social, carol, alice)

        friends = await social.list_friends(alice.id)

        assert [f.username for f in friends] == ["bob", "carol"]

    async def test_friend_detail_requires_friendship(self, social, make_character):
        """Test only friends can view each other."""
        alice = await make_character("alice")
        bob = await make_character("bob")

        with pytest.raises(NotFriendsError):
            await social.friend_detail(alice.id, bob.id)

        await self._befriend(social, alice, bob)
        detail = await social.friend_detail(alice.id, bob.id)
        assert detail.username == "bob"


class TestLeaderboard:
    """Tests for the ranking."""

    async def test_ordering_and_tie_break(self, social, make_character):
        """Test level, then experience, then creation order."""
        first = await make_character("first", level=3, experience_leftover=10)
        second = await make_character("second", level=5, experience_leftover=0)
        third = await make_character("third", level=3, experience_leftover=50)
        fourth = await make_character("fourth", level=3, experience_leftover=10)

        board = await social.leaderboard()

        assert [e.character_id for e in board] == [second.id, third.id, first.id, fourth.id]
        assert [e.rank for e in board] == [1, 2, 3, 4]
        assert board[0].experience_needed == experience_required(5)

    async def test_limit(self, social, make_character):
        """Test the board is truncated."""
        for level in range(1, 6):
            await make_character(level=level)

        board = await social.leaderboard(limit=2)

        assert [e.level for e in board] == [5, 4]

    async def test_negative_limit_rejected(self, social, make_character):
        """Test a negative limit is an error rather than the whole table."""
        for _ in range(3):
            await make_character()

        with pytest.raises(InvalidAmountError):
            await social.leaderboard(-1)

    async def test_zero_limit(self, social, make_character):
        """Test a zero limit yields an empty board."""
        await make_character()
        assert await social.leaderboard(0) == []
