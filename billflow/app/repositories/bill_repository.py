"""Bill Repository Interface

Defines the contract for bill persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from billflow.domain.bill import Bill


class BillRepository(ABC):
    """
    Repository interface for Bill persistence

    The invoice core never touches storage; use cases load records through
    this interface and hand them to the pure functions.
    """

    @abstractmethod
    async def list_all(self) -> List[Bill]:
        """
        Retrieve every bill

        Returns:
            All bills, most recently created first
        """
        pass

    @abstractmethod
    async def get_by_id(self, bill_id: str) -> Optional[Bill]:
        """
        Retrieve bill by ID

        Args:
            bill_id: Bill record key

        Returns:
            Bill if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, bill: Bill) -> Bill:
        """
        Create a new bill

        Args:
            bill: Bill entity to persist

        Returns:
            Created Bill with record key and timestamps assigned
        """
        pass

    @abstractmethod
    async def update(self, bill_id: str, changes: Dict[str, Any]) -> Optional[Bill]:
        """
        Merge changes into an existing bill

        The record key is never changed; updated_at is refreshed.

        Args:
            bill_id: Bill record key
            changes: Field name -> new value

        Returns:
            Updated Bill, None if it does not exist
        """
        pass

    @abstractmethod
    async def delete(self, bill_id: str) -> bool:
        """
        Delete a bill

        Args:
            bill_id: Bill record key

        Returns:
            True if a bill was deleted, False if it did not exist
        """
        pass

    @abstractmethod
    async def list_invoice_numbers(self, prefix: str) -> List[str]:
        """
        Invoice numbers starting with prefix

        Used to derive the next invoice number of a year.

        Args:
            prefix: Invoice number prefix (e.g., SC2025)

        Returns:
            Matching invoice numbers
        """
        pass
