"""
Section renderers: turn each dataset into a readable text block for the prompt.
"""

from typing import Any, List, Sequence, Tuple

from knowledge.formatter import format_value, to_text

MARKETING_HEADER = "## MARKETING EMAIL LOGS ##"
PURCHASE_HEADER = "## PURCHASE ORDERS ##"
SALES_HEADER = "## SALES ORDERS ##"

MARKETING_EMPTY = f"{MARKETING_HEADER}\nNo marketing logs loaded.\n\n"
PURCHASE_EMPTY = f"{PURCHASE_HEADER}\nNo purchase order data loaded.\n\n"
SALES_EMPTY = f"{SALES_HEADER}\nNo sales order data loaded.\n\n"

# (display label, source field)
PURCHASE_ORDER_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("Reference", "Order Reference"),
    ("Priority", "Priority"),
    ("Vendor", "Vendor"),
    ("Buyer", "Buyer"),
    ("Order Deadline", "Order Deadline"),
    ("Activities", "Activities"),
    ("Source Document", "Source Document"),
    ("Total", "Total"),
    ("Status", "Status"),
)

SALES_ORDER_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("Reference", "Order Reference"),
    ("Creation Date", "Creation Date"),
    ("Customer", "Customer"),
    ("Salesperson", "Salesperson"),
    ("Activities", "Activities"),
    ("Total", "Total"),
    ("Status", "Status"),
)


def _has_rows(rows: Any) -> bool:
    return isinstance(rows, list) and len(rows) > 0


def render_marketing_logs(rows: List[dict]) -> str:
    """
    Render marketing email logs.

    Ratio columns are echoed as stored with a % suffix; no date or empty-string
    handling is applied to this section.
    """
    if not _has_rows(rows):
        return MARKETING_EMPTY

    lines = [MARKETING_HEADER, ""]
    for idx, item in enumerate(rows, start=1):
        lines.append(f"- Email #{idx}")
        lines.append(f'  - Subject: "{to_text(item.get("Subject"))}"')
        lines.append(f"  - Responsible: {to_text(item.get('Responsible'))}")
        lines.append(f"  - Sent: {to_text(item.get('Sent'))}")
        lines.append(f"  - Received Ratio: {to_text(item.get('Received Ratio'))}%")
        lines.append(f"  - Opened Ratio: {to_text(item.get('Opened Ratio'))}%")
        lines.append(f"  - Click Ratio: {to_text(item.get('Number of Clicks'))}%")
        lines.append(f"  - Replied Ratio: {to_text(item.get('Replied Ratio'))}%")
        lines.append(f"  - Status: {to_text(item.get('Status'))}")
        lines.append("")
    return "\n".join(lines) + "\n"


def _render_orders(
    header: str,
    item_name: str,
    fields: Sequence[Tuple[str, str]],
    rows: List[dict],
) -> str:
    lines = [header, ""]
    for idx, item in enumerate(rows, start=1):
        lines.append(f"- {item_name} #{idx}")
        for label, field in fields:
            lines.append(f"  - {label}: {format_value(field, item.get(field))}")
        lines.append("")
    return "\n".join(lines) + "\n"


def render_purchase_orders(rows: List[dict]) -> str:
    if not _has_rows(rows):
        return PURCHASE_EMPTY
    return _render_orders(PURCHASE_HEADER, "Purchase Order", PURCHASE_ORDER_FIELDS, rows)


def render_sales_orders(rows: List[dict]) -> str:
    if not _has_rows(rows):
        return SALES_EMPTY
    return _render_orders(SALES_HEADER, "Sales Order", SALES_ORDER_FIELDS, rows)
