"""
Pre-Order Service

Business logic behind the pre-order form and the admin dashboard:
submission, filtering, status/notes updates, summary stats and CSV export.
"""
import logging
from collections import Counter
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional

from app.core.exceptions import StorefrontError
from app.domain.preorder import (
    PreOrder,
    PreOrderConfirmation,
    PreOrderCreate,
    PreOrderStats,
    PreOrderStatus,
    PreOrderUpdate,
    TopProduct,
)
from app.repositories.preorder_repository import PreOrderRepository
from app.services.email_service import EmailService

logger = logging.getLogger(__name__)

TOP_PRODUCTS_LIMIT = 5

CSV_HEADERS = [
    "Date",
    "Email",
    "Name",
    "Phone",
    "Product",
    "Variant",
    "Quantity",
    "Price",
    "Status",
    "Notes",
]


def filter_preorders(preorders: Iterable[PreOrder], search: Optional[str] = None,
                     status: Optional[str] = None) -> List[PreOrder]:
    """
    Case-insensitive search over email, product title and name, plus an
    exact status filter. Empty search and status "all" match everything.
    """
    query = (search or "").strip().lower()
    status = status or "all"

    results = []
    for preorder in preorders:
        matches_search = (
            not query
            or query in preorder.email.lower()
            or query in preorder.product_title.lower()
            or (preorder.name is not None and query in preorder.name.lower())
        )
        matches_status = status == "all" or preorder.status.value == status
        if matches_search and matches_status:
            results.append(preorder)
    return results


def compute_stats(preorders: List[PreOrder]) -> PreOrderStats:
    """
    Dashboard summary

    top_products sums quantities per product title; ties keep the order in
    which titles were first seen.
    """
    potential_revenue = sum((p.line_value for p in preorders), Decimal("0"))
    pending_count = sum(1 for p in preorders if p.status == PreOrderStatus.PENDING)

    product_counts: Counter = Counter()
    for preorder in preorders:
        product_counts[preorder.product_title] += preorder.quantity

    # Counter.most_common is stable for equal counts (insertion order)
    top_products = [
        TopProduct(title=title, count=count)
        for title, count in product_counts.most_common(TOP_PRODUCTS_LIMIT)
    ]

    return PreOrderStats(
        total_preorders=len(preorders),
        potential_revenue=float(potential_revenue.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)),
        pending_count=pending_count,
        top_products=top_products,
    )


def _csv_cell(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def export_csv(preorders: List[PreOrder]) -> str:
    """
    CSV export for the dashboard.

    Every cell is quoted, embedded quotes are doubled and rows are joined
    with a bare newline.
    """
    lines = [",".join(CSV_HEADERS)]
    for p in preorders:
        row = [
            p.created_at.date().isoformat(),
            p.email,
            p.name or "",
            p.phone or "",
            p.product_title,
            p.variant_title,
            str(p.quantity),
            f"{p.price_at_order:.2f}" if p.price_at_order is not None else "",
            p.status.value,
            p.notes or "",
        ]
        lines.append(",".join(_csv_cell(cell) for cell in row))
    return "\n".join(lines)


class PreOrderService:
    def __init__(self, repository: Optional[PreOrderRepository] = None,
                 email_service: Optional[EmailService] = None):
        self.repository = repository or PreOrderRepository()
        self.email_service = email_service or EmailService()

    async def submit(self, request: PreOrderCreate) -> dict:
        """
        Store a pre-order and email the customer.

        A failed confirmation email is logged and reported as
        email_sent=False; the pre-order itself still stands.
        """
        preorder = self.repository.create(request.to_row())
        logger.info(f"Pre-order stored for {request.product_handle} ({request.variant_title})")

        email_sent = True
        try:
            await self.email_service.send_preorder_confirmation(
                PreOrderConfirmation(
                    email=request.email,
                    name=request.name,
                    product_title=request.product_title,
                    variant_title=request.variant_title,
                    quantity=request.quantity,
                    price=request.price or "",
                )
            )
        except StorefrontError as e:
            logger.warning(f"Pre-order confirmation email not sent: {e.message}")
            email_sent = False
        except Exception as e:
            logger.error(f"Unexpected error sending pre-order confirmation: {e}", exc_info=True)
            email_sent = False

        return {
            "success": True,
            "preorder_id": preorder.id if preorder else None,
            "email_sent": email_sent,
        }

    def list_preorders(self, search: Optional[str] = None, status: Optional[str] = None) -> List[PreOrder]:
        return filter_preorders(self.repository.find_all(), search=search, status=status)

    def update(self, update: PreOrderUpdate) -> PreOrder:
        changes = update.changes()
        if not changes:
            raise StorefrontError("Nothing to update", status_code=400)
        logger.info(f"Updating pre-order {update.id}: {sorted(changes)}")
        return self.repository.update(update.id, changes)

    def stats(self) -> PreOrderStats:
        return compute_stats(self.repository.find_all())

    def export(self, search: Optional[str] = None, status: Optional[str] = None) -> str:
        return export_csv(self.list_preorders(search=search, status=status))


def get_preorder_service() -> PreOrderService:
    return PreOrderService()
