"""fitquest exception hierarchy.

Every error raised by the engine derives from FitQuestError. Callers branch on
the family (validation, precondition, not found, store) and show `message`.
"""


class FitQuestError(Exception):
    """Base class for all fitquest errors."""

    def __init__(self, message: str = "Unknown error"):
        self.message = message
        super().__init__(self.message)


class ValidationError(FitQuestError):
    """Bad input, detected before anything is written."""


class PreconditionError(FitQuestError):
    """A business rule failed inside a transaction, which was rolled back."""


class NotFoundError(FitQuestError):
    """A referenced entity does not exist."""


class StoreError(FitQuestError):
    """Infrastructure failure in the persistence layer."""


# =============================================================================
# Validation
# =============================================================================


class UnknownStatError(ValidationError):
    def __init__(self, stat_name: str):
        self.stat_name = stat_name
        super().__init__(
            f"Unknown stat '{stat_name}'. Expected strength, endurance or flexibility"
        )


class InvalidAmountError(ValidationError):
    def __init__(self, amount: int, what: str = "amount"):
        self.amount = amount
        super().__init__(f"Invalid {what}: {amount}")


class SelfFriendRequestError(ValidationError):
    def __init__(self, character_id: int):
        self.character_id = character_id
        super().__init__("You cannot send a friend request to yourself")


class InvalidWorkoutError(ValidationError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid workout: {reason}")


class UnknownClassError(ValidationError):
    def __init__(self, class_name: str):
        self.class_name = class_name
        super().__init__(f"Unknown class: {class_name}")


class UsernameTakenError(ValidationError):
    def __init__(self, username: str):
        self.username = username
        super().__init__(f"Username '{username}' is already taken")


# =============================================================================
# Preconditions
# =============================================================================


class InsufficientPointsError(PreconditionError):
    def __init__(self, required: int, available: int):
        self.required = required
        self.available = available
        super().__init__(
            f"Not enough pending stat points (required: {required}, available: {available})"
        )


class InsufficientFundsError(PreconditionError):
    def __init__(self, required: int, available: int):
        self.required = required
        self.available = available
        super().__init__(f"Not enough coins (required: {required}, available: {available})")


class ItemAlreadyOwnedError(PreconditionError):
    def __init__(self, item_id: int):
        self.item_id = item_id
        super().__init__(f"You already own item {item_id}")


class ItemNotInShopError(PreconditionError):
    def __init__(self, item_id: int):
        self.item_id = item_id
        super().__init__(f"Item {item_id} is not available in the shop")


class ItemNotOwnedError(PreconditionError):
    def __init__(self, item_id: int):
        self.item_id = item_id
        super().__init__(f"You do not own item {item_id}")


class NotFriendsError(PreconditionError):
    def __init__(self, character_id: int, other_id: int):
        self.character_id = character_id
        self.other_id = other_id
        super().__init__(f"Character {other_id} is not in your friends list")


class AlreadyFriendsError(PreconditionError):
    def __init__(self, character_id: int, other_id: int):
        self.character_id = character_id
        self.other_id = other_id
        super().__init__(f"You are already friends with character {other_id}")


class FriendRequestPendingError(PreconditionError):
    def __init__(self, sender_id: int, recipient_id: int):
        self.sender_id = sender_id
        self.recipient_id = recipient_id
        super().__init__("A friend request between you is already pending")


class FriendRequestForbiddenError(PreconditionError):
    def __init__(self, request_id: int, responder_id: int):
        self.request_id = request_id
        self.responder_id = responder_id
        super().__init__(f"Friend request {request_id} was not sent to you")


# =============================================================================
# Not found
# =============================================================================


class CharacterNotFoundError(NotFoundError):
    def __init__(self, character_id: int):
        self.character_id = character_id
        super().__init__(f"Character not found: {character_id}")


class RecipientNotFoundError(CharacterNotFoundError):
    pass


class FriendRequestNotFoundError(NotFoundError):
    def __init__(self, request_id: int):
        self.request_id = request_id
        super().__init__(f"Friend request not found: {request_id}")


class ItemNotFoundError(NotFoundError):
    def __init__(self, item_id: int):
        self.item_id = item_id
        super().__init__(f"Item not found: {item_id}")


class ExerciseNotFoundError(NotFoundError):
    def __init__(self, exercise_ids: list[str]):
        self.exercise_ids = exercise_ids
        super().__init__(f"Unknown exercise(s): {', '.join(exercise_ids)}")


# =============================================================================
# Store
# =============================================================================


class StoreConflictError(StoreError):
    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"The database is busy, please try again (gave up after {attempts} attempts)")
