"""
Knowledge Base Builder
----------------------
Assembles the three rendered datasets into the business data block embedded
in every prompt.

The block is built once per Lambda container and cached for its lifetime.
Changes to the underlying files are not picked up until the container is
recycled.
"""

from typing import Optional

import config
from knowledge.loader import load_dataset
from knowledge.renderers import (
    render_marketing_logs,
    render_purchase_orders,
    render_sales_orders,
)
from utils.logger import logger

START_MARKER = "[START BUSINESS DATA]\n"
END_MARKER = "[END BUSINESS DATA]\n"

_knowledge_base: Optional[str] = None


def build_knowledge_base() -> str:
    marketing_logs = load_dataset(config.MARKETING_LOGS_FILE)
    purchase_orders = load_dataset(config.PURCHASE_ORDERS_FILE)
    sales_orders = load_dataset(config.SALES_ORDERS_FILE)

    logger.info(
        f"Building knowledge base: {len(marketing_logs)} marketing logs, "
        f"{len(purchase_orders)} purchase orders, {len(sales_orders)} sales orders"
    )

    return (
        START_MARKER
        + render_marketing_logs(marketing_logs)
        + render_purchase_orders(purchase_orders)
        + render_sales_orders(sales_orders)
        + END_MARKER
    )


def get_knowledge_base() -> str:
    """Return the cached knowledge base, building it on first use."""
    global _knowledge_base
    if _knowledge_base is None:
        _knowledge_base = build_knowledge_base()
    return _knowledge_base
