# anymessage/storage/storage_interfaces.py
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

Row = Dict[str, Any]


class AbstractTable(ABC):
    """
    Table-style access to a single relation in the backing store.

    Criteria are equality filters combined with AND. Rows are returned as
    plain dictionaries keyed by column name.
    """

    @abstractmethod
    async def find_one(self, criteria: Dict[str, Any]) -> Optional[Row]:
        """Return the first row matching the criteria, or None."""
        pass

    @abstractmethod
    async def find(self, criteria: Dict[str, Any]) -> List[Row]:
        """Return every row matching the criteria."""
        pass

    @abstractmethod
    async def insert(self, fields: Dict[str, Any]) -> Optional[Row]:
        """
        Insert a row.

        Returns:
            The stored row including store-assigned columns, or None if
            the store did not report a row.
        """
        pass

    @abstractmethod
    async def update(self, criteria: Dict[str, Any], fields: Dict[str, Any]) -> Optional[Row]:
        """
        Update rows matching the criteria.

        Returns:
            The first updated row as stored after the write, or None if
            nothing matched.
        """
        pass


class AbstractDatabase(ABC):
    """
    Persistence gateway the application depends on.

    Implementations provide table-style operations plus a raw parameterized
    query for joins. A single instance is created per application and handed
    to request handlers through dependency injection.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Open connections and ensure the schema exists."""
        pass

    @abstractmethod
    async def teardown(self) -> None:
        """Release connections held by the gateway."""
        pass

    @abstractmethod
    def table(self, name: str) -> AbstractTable:
        """Return table-style access to the named relation."""
        pass

    @abstractmethod
    async def query(self, sql: str, params: Sequence[Any] = ()) -> List[Row]:
        """Run a raw parameterized query and return all rows."""
        pass
