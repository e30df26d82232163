# anymessage/auth/user_store.py
import logging
from typing import Optional
from datetime import datetime, timezone

from .models import UserInDB
from ..storage.storage_interfaces import AbstractDatabase, Row

logger = logging.getLogger(__name__)


class UserStore:
    """Reads and writes user rows through the persistence gateway."""

    def __init__(self, db: AbstractDatabase):
        self.users = db.table("users")

    def _row_to_user(self, row: Optional[Row]) -> Optional[UserInDB]:
        if not row:
            return None
        return UserInDB.model_validate(row)

    async def get_by_email(self, email: str) -> Optional[UserInDB]:
        return self._row_to_user(await self.users.find_one({"email": email}))

    async def get_by_token_hash(self, token_hash: str) -> Optional[UserInDB]:
        return self._row_to_user(await self.users.find_one({"token_hash": token_hash}))

    async def save_token_hash(self, email: str, token_hash: str) -> UserInDB:
        """
        Store a new token hash for the user, creating the user if needed.

        Any previously issued token for the same email stops working.
        """
        now = datetime.now(timezone.utc).isoformat()
        existing = await self.users.find_one({"email": email})
        if existing:
            logger.info(f"User '{email}' already exists. Replacing token hash.")
            row = await self.users.update(
                {"id": existing["id"]},
                {"token_hash": token_hash, "last_used_at": now}
            )
        else:
            row = await self.users.insert({
                "email": email,
                "token_hash": token_hash,
                "created_at": now,
                "last_used_at": now,
            })
        user = self._row_to_user(row)
        if user is None:
            raise RuntimeError(f"User row for '{email}' was not returned by the store.")
        return user

    async def update_last_used(self, user_id: int) -> None:
        """Update the last used timestamp for token activity tracking."""
        await self.users.update(
            {"id": user_id},
            {"last_used_at": datetime.now(timezone.utc).isoformat()}
        )

    async def assign_team(self, user_id: int, team_id: int) -> Optional[UserInDB]:
        return self._row_to_user(await self.users.update({"id": user_id}, {"team_id": team_id}))
