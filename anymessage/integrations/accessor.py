# anymessage/integrations/accessor.py
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import status

from .models import Integration
from ..errors import ModelError, NotInitializedError
from ..storage.storage_interfaces import AbstractDatabase, Row
from ..utils.security import FernetEncryptor

logger = logging.getLogger(__name__)


def _row_to_integration(row: Row) -> Integration:
    return Integration(
        id=row["id"],
        team_id=row["team_id"],
        name=row["name"],
        providers=json.loads(row["providers"]) if row["providers"] else [],
        authentication=row["authentication"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class BoundIntegration:
    """An integration accessor bound to its (possibly not yet persisted) row."""

    def __init__(self, db: AbstractDatabase, integration: Integration, encryptor: FernetEncryptor):
        self._db = db
        self._integration = integration
        self._encryptor = encryptor

    @property
    def integration(self) -> Integration:
        return self._integration

    @property
    def is_persisted(self) -> bool:
        return self._integration.id is not None

    def get_providers(self) -> List[str]:
        return list(self._integration.providers)

    def get_authentication(self) -> Optional[Dict[str, Any]]:
        """Decrypt the stored authentication payload. None if nothing is stored."""
        if not self._integration.authentication:
            return None
        return self._encryptor.decrypt_json(self._integration.authentication)

    async def _check_provider_conflicts(self, providers: List[str]) -> None:
        """A provider can only be served by one integration per team."""
        try:
            rows = await self._db.table("integrations").find({"team_id": self._integration.team_id})
        except Exception as e:
            raise ModelError.wrap(e)

        requested = set(providers)
        for row in rows:
            if row["name"] == self._integration.name:
                continue
            taken = requested.intersection(json.loads(row["providers"]) if row["providers"] else [])
            if taken:
                raise ModelError(
                    f"Provider '{sorted(taken)[0]}' is already used by integration '{row['name']}'.",
                    status=status.HTTP_409_CONFLICT
                )

    async def save(self, authentication: Dict[str, Any], providers: List[str]) -> "BoundIntegration":
        """
        Encrypt and persist the credentials and provider list.

        Inserts the row on first save and updates it afterwards, with a single
        write either way.

        Raises:
            ModelError: On provider conflicts (409), when encryption is not
                configured, or when the store fails
        """
        await self._check_provider_conflicts(providers)

        encrypted = self._encryptor.encrypt_json(authentication)
        if encrypted is None:
            logger.error("Cannot save integration: Encryption service is not properly configured.")
            raise ModelError("Encryption service unavailable for saving integration credentials.")

        now = datetime.now(timezone.utc).isoformat()
        fields = {
            "authentication": encrypted,
            "providers": json.dumps(providers),
            "updated_at": now,
        }
        table = self._db.table("integrations")
        try:
            if self.is_persisted:
                row = await table.update({"id": self._integration.id}, fields)
            else:
                row = await table.insert({
                    "team_id": self._integration.team_id,
                    "name": self._integration.name,
                    "created_at": now,
                    **fields,
                })
        except Exception as e:
            raise ModelError.wrap(e)

        if not row:
            raise ModelError(f"Integration '{self._integration.name}' was not saved. Please verify model integrity.")

        logger.info(
            f"Saved integration '{self._integration.name}' for team {self._integration.team_id} "
            f"with providers {providers}."
        )
        return BoundIntegration(self._db, _row_to_integration(row), self._encryptor)


class IntegrationAccessor:
    """
    Interact with the integrations table for one team and integration name.

    init() binds the accessor, loading the stored row when one exists. A
    missing row is not an error: the bound integration is saved on first use.
    """

    def __init__(self, db: AbstractDatabase, team_id: int, name: str, encryptor: FernetEncryptor):
        self._db = db
        self.team_id = team_id
        self.name = name
        self._encryptor = encryptor

    async def init(self) -> BoundIntegration:
        try:
            row = await self._db.table("integrations").find_one({"team_id": self.team_id, "name": self.name})
        except Exception as e:
            raise ModelError.wrap(e)

        if row:
            integration = _row_to_integration(row)
        else:
            logger.debug(f"Integration '{self.name}' for team {self.team_id} not stored yet.")
            integration = Integration(team_id=self.team_id, name=self.name)
        return BoundIntegration(self._db, integration, self._encryptor)

    async def save(self, authentication: Dict[str, Any], providers: List[str]) -> BoundIntegration:
        raise NotInitializedError()

    def get_providers(self) -> List[str]:
        raise NotInitializedError()

    def get_authentication(self) -> Optional[Dict[str, Any]]:
        raise NotInitializedError()
