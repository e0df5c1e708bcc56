"""
Handles database interactions for the chat application.

Essentially a wrapper around the Supabase client so that the messaging service doesn't have to deal with the
specifics of the database.
"""

import logging
import os
from typing import Any

import httpx
from postgrest.base_request_builder import APIResponse
from postgrest.exceptions import APIError
from postgrest.types import ReturnMethod
from pydantic import TypeAdapter, ValidationError
from supabase import AsyncClient, acreate_client
from supabase.lib.client_options import AsyncClientOptions

from roomchat.db.errors import MalformedRowError, NotFoundError, RoomNotFound, StoreError, UserNotFound
from roomchat.db.schema import (
    ROOM_ACTIVITY_COLUMNS,
    ROOM_NAME_COLUMNS,
    ROOMS_TABLE,
    ROOMS_WITH_ACTIVITY_VIEW,
    USER_PROFILE_COLUMNS,
    USERS_TABLE,
    Room,
    User,
    UserProfile,
    room_activity_rows,
    room_name_rows,
    user_profile_rows,
)

__all__ = [
    "MalformedRowError",
    "NotFoundError",
    "Room",
    "RoomNotFound",
    "StoreError",
    "User",
    "UserNotFound",
    "UserProfile",
    "UserRoomStore",
    "create_store",
]

logger = logging.getLogger(__name__)


class UserRoomStore:
    """Reads and writes users and rooms in the remote store.

    The store holds nothing but the client, so a single instance can be shared by every caller in the process.
    """

    __slots__ = ("_client",)

    def __init__(self, client: AsyncClient):
        self._client = client

    @property
    def client(self) -> AsyncClient:
        """The shared Supabase client."""
        return self._client

    @staticmethod
    async def _execute(query: Any, table: str) -> APIResponse[Any]:
        """Run a single query, translating any failure into a StoreError."""
        try:
            return await query.execute()
        except APIError as e:
            logger.warning("Query on %s failed: %s", table, e.message)
            raise StoreError(e.message or str(e)) from e
        except httpx.HTTPError as e:
            logger.warning("Could not reach the store for %s: %s", table, e)
            raise StoreError(str(e)) from e

    @staticmethod
    def _validate[T](adapter: TypeAdapter[list[T]], table: str, data: Any) -> list[T]:
        try:
            return adapter.validate_python(data)
        except ValidationError as e:
            logger.warning("Malformed rows from %s: %s", table, e)
            raise MalformedRowError(table, str(e)) from e

    async def upsert_user(self, user: User) -> None:
        """Insert a user, or overwrite the existing user with the same ID.

        Args:
            user: The user to persist, including their access token.

        Raises:
            StoreError: The write was rejected, e.g. the access token is already taken by another user.
        """
        logger.debug("Upserting user %s", user.user_id)
        query = self._client.table(USERS_TABLE).upsert([user.to_record()], returning=ReturnMethod.minimal)
        await self._execute(query, USERS_TABLE)

    async def get_user_by_access_token(self, access_token: str) -> UserProfile | None:
        """Return the user owning *access_token* or *None* if there is no such user."""
        query = self._client.table(USERS_TABLE).select(USER_PROFILE_COLUMNS).eq("access_token", access_token)
        response = await self._execute(query, USERS_TABLE)
        records = self._validate(user_profile_rows, USERS_TABLE, response.data)
        if not records:
            logger.debug("No user found for the given access token")
            return None
        return UserProfile.from_record(records[0])

    async def get_user_by_access_token_or_fail(self, access_token: str) -> UserProfile:
        """Return the user owning *access_token*.

        Raises:
            UserNotFound: No user has this access token.
            StoreError: The lookup itself failed.
        """
        user = await self.get_user_by_access_token(access_token)
        if user is None:
            raise UserNotFound()
        return user

    async def list_rooms(self) -> list[Room]:
        """Return every room together with the time of its latest message."""
        query = self._client.table(ROOMS_WITH_ACTIVITY_VIEW).select(ROOM_ACTIVITY_COLUMNS)
        response = await self._execute(query, ROOMS_WITH_ACTIVITY_VIEW)
        records = self._validate(room_activity_rows, ROOMS_WITH_ACTIVITY_VIEW, response.data)
        return [Room.from_record(record) for record in records]

    async def get_room_name(self, room_id: int) -> str:
        """Return the name of a room.

        Raises:
            RoomNotFound: No room has this ID.
            StoreError: The lookup itself failed.
        """
        query = self._client.table(ROOMS_TABLE).select(ROOM_NAME_COLUMNS).eq("id", room_id)
        response = await self._execute(query, ROOMS_TABLE)
        records = self._validate(room_name_rows, ROOMS_TABLE, response.data)
        if not records:
            raise RoomNotFound(room_id)
        return records[0]["name"]


async def create_store(
    supabase_url: str | None = None,
    supabase_key: str | None = None,
    options: AsyncClientOptions | None = None,
) -> UserRoomStore:
    """Create the client once and wrap it in a store. Call this at process start and share the result."""
    supabase_url = supabase_url or os.environ.get("SUPABASE_API_URL")
    supabase_key = supabase_key or os.environ.get("SUPABASE_ANON_KEY")

    if not supabase_url:
        raise RuntimeError(
            "supabase_url not given and no SUPABASE_API_URL environmental variable found. "
            "Specify SUPABASE_API_URL either with a .env file or a SUPABASE_API_URL environment variable."
        )
    if not supabase_key:
        raise RuntimeError(
            "supabase_key not given and no SUPABASE_ANON_KEY environmental variable found. "
            "Specify SUPABASE_ANON_KEY either with a .env file or a SUPABASE_ANON_KEY environment variable."
        )

    client = await acreate_client(supabase_url, supabase_key, options)
    logger.info("Created Supabase client for %s", supabase_url)
    return UserRoomStore(client)
