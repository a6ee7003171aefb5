"""
Saved user accounts.

Keeps the accounts that have logged in on this device so a login screen
can offer them again, most recent first. All operations are best effort:
storage errors are logged and never raised.
"""

import json
import logging
from typing import List, Optional

from pydantic import BaseModel, ValidationError

from xtreamtv.cache.entry import now_ms
from xtreamtv.storage.base import KeyValueStore
from xtreamtv.storage.keys import StorageKeys

logger = logging.getLogger(__name__)


class SavedUser(BaseModel):
    """A remembered account."""
    username: str
    password: str
    server_url: str
    last_login: int  # epoch milliseconds


class SavedUsers:
    """Saved accounts persisted under a single key."""

    def __init__(self, store: KeyValueStore, keys: Optional[StorageKeys] = None):
        self.store = store
        self.keys = keys or StorageKeys()

    async def get_saved_users(self) -> List[SavedUser]:
        try:
            raw = await self.store.get(self.keys.saved_users)
            if not raw:
                return []
            return [SavedUser.model_validate(item) for item in json.loads(raw)]
        except (ValueError, TypeError, ValidationError) as e:
            logger.error(f"Error reading saved users: {e}")
            return []
        except Exception as e:
            logger.error(f"Error getting saved users: {e}")
            return []

    async def save_user(self, username: str, password: str, server_url: str) -> None:
        """Add or refresh an account and move it to the front."""
        try:
            users = [u for u in await self.get_saved_users() if u.username != username]
            users.insert(
                0,
                SavedUser(
                    username=username,
                    password=password,
                    server_url=server_url,
                    last_login=now_ms(),
                ),
            )
            users.sort(key=lambda u: u.last_login, reverse=True)
            await self._write(users)
        except Exception as e:
            logger.error(f"Error saving user: {e}")

    async def remove_user(self, username: str) -> None:
        try:
            users = [u for u in await self.get_saved_users() if u.username != username]
            await self._write(users)
        except Exception as e:
            logger.error(f"Error removing user: {e}")

    async def clear_all_users(self) -> None:
        try:
            await self.store.remove(self.keys.saved_users)
        except Exception as e:
            logger.error(f"Error clearing users: {e}")

    async def _write(self, users: List[SavedUser]) -> None:
        await self.store.set(
            self.keys.saved_users,
            json.dumps([u.model_dump() for u in users]),
        )
