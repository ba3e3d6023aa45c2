"""Order repository interface.

Extends ``IRepository[Order]`` with the methods the Order aggregate
needs: atomic registration with the first history entry, the
version-guarded status update and history appends.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import Order, OrderHistoryEntry


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    The aggregate includes its ``OrderHistoryEntry`` records, which are
    append-only.
    """

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Order:
        """Create an order and its initial ``created`` history entry atomically.

        ``data`` must include ``tracking_number`` and may include
        ``client_id``, ``branch_id`` and ``created_by_id``.

        Raises:
            DuplicateTrackingNumber: The tracking number is already taken.
        """

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with its history; ``None`` when missing."""

    @abstractmethod
    def get_by_tracking_number(self, tracking_number: str) -> Optional[Order]:
        """Retrieve an order by its normalised tracking number."""

    @abstractmethod
    def tracking_number_exists(self, tracking_number: str) -> bool:
        """Return ``True`` if the tracking number is already registered."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """List orders with optional filters."""

    @abstractmethod
    def conditional_update_status(
        self,
        id: Any,
        expected_version: int,
        new_status: str,
        new_branch_id: Optional[Any] = None,
    ) -> bool:
        """Set the status (and branch, when given) only if ``version`` matches.

        Increments ``version`` by one in the same statement.  Returns
        ``False`` when no row matched, i.e. the order was advanced by
        another writer (or does not exist).
        """

    @abstractmethod
    def add_history(
        self,
        order_id: Any,
        status: str,
        changed_by_id: Optional[Any] = None,
        note: Optional[str] = None,
    ) -> OrderHistoryEntry:
        """Append one entry to the order's history."""

    @abstractmethod
    def status_counts(self, branch_id: Optional[Any] = None) -> Dict[str, int]:
        """Count orders per status.

        With *branch_id*, only orders of that branch plus in-transit
        orders are counted.
        """
