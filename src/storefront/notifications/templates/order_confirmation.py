"""Order confirmation template — sent after an order is placed."""

from storefront.notifications.kind import NotificationKind


class OrderConfirmationTemplate:
    kind = NotificationKind.ORDER_CONFIRMATION

    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number", "N/A")
        currency = context.get("currency", "INR")
        items = context.get("items") or []

        lines = [f"  {item['quantity']} x {item['name']}  {currency} {item['line_total']:g}" for item in items]
        summary = "\n".join(lines) if lines else "  (no items)"

        eta = context.get("estimated_delivery")
        eta_line = f"Estimated delivery: {eta:%d %b %Y, %H:%M}\n\n" if eta else ""

        return {
            "subject": f"Order {order_number} confirmed",
            "body": (
                f"Hi {context.get('name') or 'there'},\n\n"
                f"We have received your order {order_number}.\n\n"
                f"{summary}\n\n"
                f"Subtotal: {currency} {context.get('subtotal', 0):g}\n"
                f"Delivery: {currency} {context.get('delivery_fee', 0):g}\n"
                f"Total: {currency} {context.get('total_amount', 0):g}\n\n"
                f"{eta_line}"
                "Thank you for ordering with Burgerhub!"
            ),
        }
