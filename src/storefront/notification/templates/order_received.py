"""Order received template: sent once a checkout has become an order."""


class OrderReceivedTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        total = context.get("total", "0.00")
        currency = context.get("currency", "USD")
        lines = [
            f"  {item.get('quantity', 1)} x {item.get('name', 'Item')}  {currency} {item.get('price', '0.00')}"
            for item in context.get("items", [])
        ]
        return {
            "subject": f"We received your order #{order_id}",
            "body": (
                f"Thank you! Your order #{order_id} has been received.\n\n"
                + ("\n".join(lines) + "\n\n" if lines else "")
                + f"Order Total: {currency} {total}\n"
                f"Shipping to: {context.get('ship_to', '')}\n\n"
                "We'll let you know as soon as it ships."
            ),
        }
