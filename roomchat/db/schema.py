"""Wire records of the users and rooms tables, and the domain records they map to.

This file should be the only place that is aware of the database column names.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Final, Self, TypedDict

from pydantic import TypeAdapter

USERS_TABLE: Final = "users"
ROOMS_TABLE: Final = "rooms"
ROOMS_WITH_ACTIVITY_VIEW: Final = "rooms_with_activity"


class UserProfileRecord(TypedDict):
    """The public columns of a user in the database."""

    id: int
    username: str
    avatar_url: str


class UserRecord(UserProfileRecord):
    """A record of a user in the database."""

    access_token: str


class RoomActivityRecord(TypedDict):
    """A record of the rooms_with_activity view, which joins rooms to their latest message."""

    id: int
    name: str
    last_message_at: datetime | None  # None if the room has no messages yet


class RoomNameRecord(TypedDict):
    name: str


USER_PROFILE_COLUMNS: Final = "id,username,avatar_url"
ROOM_ACTIVITY_COLUMNS: Final = "id,name,last_message_at"
ROOM_NAME_COLUMNS: Final = "name"

user_profile_rows: Final = TypeAdapter(list[UserProfileRecord])
room_activity_rows: Final = TypeAdapter(list[RoomActivityRecord])
room_name_rows: Final = TypeAdapter(list[RoomNameRecord])


@dataclass(slots=True, frozen=True)
class UserProfile:
    """A user as seen by the rest of the application. The access token is never read back."""

    user_id: int
    user_name: str
    avatar_url: str

    @classmethod
    def from_record(cls, record: UserProfileRecord) -> Self:
        return cls(user_id=record["id"], user_name=record["username"], avatar_url=record["avatar_url"])


@dataclass(slots=True, frozen=True)
class User:
    """A user together with the access token that authenticates them."""

    user_id: int
    user_name: str
    avatar_url: str
    access_token: str

    @property
    def profile(self) -> UserProfile:
        """The user without their credential."""
        return UserProfile(user_id=self.user_id, user_name=self.user_name, avatar_url=self.avatar_url)

    def to_record(self) -> UserRecord:
        return {
            "id": self.user_id,
            "username": self.user_name,
            "avatar_url": self.avatar_url,
            "access_token": self.access_token,
        }


@dataclass(slots=True, frozen=True)
class Room:
    """A chat room and the time of its most recent message."""

    room_id: int
    name: str
    last_message_at: datetime | None

    @classmethod
    def from_record(cls, record: RoomActivityRecord) -> Self:
        return cls(room_id=record["id"], name=record["name"], last_message_at=record["last_message_at"])
