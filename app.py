"""
Entry point for checking the connection to the chat database by hand.

Prints every room and the time of its latest message.
"""

import asyncio

from dotenv import load_dotenv

from roomchat import setup_logging
from roomchat.db import create_store


async def main() -> None:
    store = await create_store()
    for room in await store.list_rooms():
        print(f"{room.room_id}\t{room.name}\t{room.last_message_at or '-'}")


if __name__ == "__main__":
    # Check .env.example for environment variables configuration
    load_dotenv(".env")
    setup_logging(dev_mode=False)
    asyncio.run(main())
