"""Supabase repository for inventory items."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from nutrition_planner.domain.inventory import InventoryCategory, InventoryItem
from nutrition_planner.services.planner import InventoryRepository


@dataclass
class SupabaseInventoryRepository(InventoryRepository):
    """Supabase-backed, read-only inventory access."""

    client: Client

    def list_items(self, user_id: UUID) -> list[InventoryItem]:
        """Return all inventory items for a user."""
        response = (
            self.client.table("inventory_items")
            .select("id, name, quantity, unit, category, expiry_date")
            .eq("user_id", str(user_id))
            .order("name", desc=False)
            .execute()
        )
        return [_parse_item(row) for row in response.data or []]


def _parse_item(row: dict[str, object]) -> InventoryItem:
    """Parse an inventory row into a domain model."""
    expiry_raw = row.get("expiry_date")
    expiry_date = (
        date.fromisoformat(expiry_raw[:10])
        if isinstance(expiry_raw, str) and expiry_raw
        else None
    )
    quantity = row.get("quantity")
    return InventoryItem(
        id=str(row.get("id", "")),
        name=str(row.get("name", "")),
        quantity=float(quantity) if isinstance(quantity, int | float) else 0.0,
        unit=str(row.get("unit") or ""),
        category=InventoryCategory.parse(row.get("category")),
        expiry_date=expiry_date,
    )
