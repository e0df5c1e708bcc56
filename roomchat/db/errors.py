"""Errors raised by the data access layer."""


class StoreError(Exception):
    """The underlying store reported a failure."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class MalformedRowError(StoreError):
    """A row returned by the store did not have the expected shape."""

    def __init__(self, table: str, detail: str) -> None:
        self.table = table
        super().__init__(f"Malformed row in '{table}': {detail}")


class NotFoundError(Exception):
    """Base for records that are required but do not exist."""


class UserNotFound(NotFoundError):
    def __init__(self) -> None:
        # Never echo the token back, it is a credential.
        super().__init__("Could not find user with access token.")


class RoomNotFound(NotFoundError):
    def __init__(self, room_id: int) -> None:
        self.room_id = room_id
        super().__init__(f"Room with ID {room_id} not found.")
