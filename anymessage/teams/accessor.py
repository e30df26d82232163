# anymessage/teams/accessor.py
import logging
from typing import Optional

from .models import Team
from ..billing.service import AbstractBillingService
from ..errors import ModelError, NotInitializedError, TeamCreationError, TeamNotFoundError
from ..storage.storage_interfaces import AbstractDatabase

logger = logging.getLogger(__name__)


class BoundTeam:
    """
    A team accessor that has been bound to a persisted row.

    Wraps an immutable Team snapshot. Setters write through to the store and
    return a new BoundTeam carrying the persisted values; the receiver is
    left unchanged.
    """

    def __init__(
        self,
        db: AbstractDatabase,
        team: Team,
        billing: Optional[AbstractBillingService] = None
    ):
        self._db = db
        self._team = team
        self._billing = billing

    def __repr__(self) -> str:
        return f"BoundTeam(id={self._team.id}, subdomain='{self._team.subdomain}')"

    @property
    def team(self) -> Team:
        return self._team

    @property
    def id(self) -> int:
        return self._team.id

    def get_subdomain(self) -> str:
        return self._team.subdomain

    def get_customer_id(self) -> Optional[str]:
        return self._team.customer_id

    async def _update(self, **fields) -> "BoundTeam":
        try:
            row = await self._db.table("teams").update({"id": self._team.id}, fields)
        except Exception as e:
            raise ModelError.wrap(e)
        if not row:
            logger.warning(f"Team {self._team.id} vanished before update of {sorted(fields)}.")
            raise TeamNotFoundError(self._team.id)
        return BoundTeam(self._db, Team.model_validate(row), self._billing)

    async def set_subdomain(self, new_url: str) -> "BoundTeam":
        """Persist a new subdomain and return the updated handle."""
        logger.info(f"Team {self._team.id}: changing subdomain '{self._team.subdomain}' -> '{new_url}'")
        return await self._update(subdomain=new_url)

    async def set_customer_id(self, customer_id: Optional[str]) -> "BoundTeam":
        """Persist a new billing customer reference and return the updated handle."""
        logger.info(f"Team {self._team.id}: setting billing customer id.")
        return await self._update(customer_id=customer_id)

    async def has_active_subscription(self) -> bool:
        if self._billing is None:
            raise ModelError("Billing service is not configured for this team accessor.")
        return await self._billing.has_active_subscription(self._team.customer_id)


class TeamAccessor:
    """
    Interact with the teams table.

    A fresh accessor is unbound: call init() to load an existing team by id,
    or create() to insert a new one. Both return a BoundTeam, which is the
    only object exposing team data. Getters and setters called on the unbound
    accessor raise NotInitializedError and never touch the store.
    """

    def __init__(
        self,
        db: AbstractDatabase,
        team_id: Optional[int] = None,
        billing: Optional[AbstractBillingService] = None
    ):
        self._db = db
        self.team_id = team_id
        self._billing = billing

    @staticmethod
    async def available(db: AbstractDatabase, subdomain: str) -> bool:
        """Check if a subdomain is not yet taken by any team."""
        try:
            found = await db.table("teams").find_one({"subdomain": subdomain})
        except Exception as e:
            raise ModelError.wrap(e)
        return found is None

    @staticmethod
    async def find_by_host(db: AbstractDatabase, host: str) -> Optional[Team]:
        """Find the team whose subdomain is the first label of ``host``."""
        subdomain = host.split(".")[0]
        try:
            found = await db.table("teams").find_one({"subdomain": subdomain})
        except Exception as e:
            raise ModelError.wrap(e)
        return Team.model_validate(found) if found else None

    async def init(self) -> BoundTeam:
        """
        Load the team by id.

        Raises:
            TeamNotFoundError: If no team row has this id
            ModelError: If the store fails
        """
        if self.team_id is None:
            raise ModelError("A team id is required to initialize a team accessor.")
        try:
            row = await self._db.table("teams").find_one({"id": self.team_id})
        except Exception as e:
            raise ModelError.wrap(e)

        if not row:
            logger.warning(f"Cannot find team with id {self.team_id}.")
            raise TeamNotFoundError(self.team_id)

        return BoundTeam(self._db, Team.model_validate(row), self._billing)

    async def create(self, new_url: str) -> BoundTeam:
        """
        Alternative to init() when the team does not exist yet.

        Raises:
            TeamCreationError: If the store reports no row for the insert
            ModelError: If the store fails
        """
        try:
            row = await self._db.table("teams").insert({"subdomain": new_url})
        except Exception as e:
            raise ModelError.wrap(e)

        if not row:
            raise TeamCreationError()

        team = Team.model_validate(row)
        self.team_id = team.id
        logger.info(f"Created team {team.id} with subdomain '{team.subdomain}'.")
        return BoundTeam(self._db, team, self._billing)

    def get_subdomain(self) -> str:
        raise NotInitializedError()

    def get_customer_id(self) -> Optional[str]:
        raise NotInitializedError()

    async def set_subdomain(self, new_url: str) -> BoundTeam:
        raise NotInitializedError()

    async def set_customer_id(self, customer_id: Optional[str]) -> BoundTeam:
        raise NotInitializedError()

    async def has_active_subscription(self) -> bool:
        raise NotInitializedError()
