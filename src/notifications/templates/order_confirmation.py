"""Order confirmation template: sent once an order has been stored."""

from notifications.payload import EmailPayload
from notifications.templates import escape, format_money

_STYLE = """
    body { margin: 0; padding: 0; background: #f5f5f7; font-family: Arial, sans-serif; color: #222; }
    .email-container { background: #ffffff; max-width: 620px; margin: 30px auto; border-radius: 14px; }
    .header { background: #d87d4a; color: #fff; text-align: center; padding: 40px 30px; }
    .section { padding: 32px; }
    .address-box { background: #fafafa; padding: 16px; border: 1px solid #ececec; border-radius: 8px; }
    .items-table { width: 100%; border-collapse: collapse; margin-top: 10px; }
    .items-table th, .items-table td { text-align: left; padding: 8px 4px; border-bottom: 1px solid #f1f1f1; }
    .grand-total { font-size: 22px; font-weight: 800; margin-top: 14px; color: #d87d4a; }
    .cta-button { display: inline-block; background: #d87d4a; color: #fff; padding: 14px 28px;
                  text-decoration: none; border-radius: 8px; margin-top: 28px; }
    .footer { text-align: center; font-size: 12px; color: #555; padding: 28px; }
"""


class OrderConfirmationTemplate:
    @staticmethod
    def render(payload: EmailPayload, app_url: str = "https://audiophile.com", store_name: str = "Audiophile") -> dict:
        order_ref = payload.order_id or "N/A"
        customer = payload.customer
        address = payload.shipping_address
        totals = payload.totals
        order_url = f"{app_url.rstrip('/')}/orders/{payload.order_id}"

        item_rows = "".join(
            "<tr>"
            f"<td>{escape(item.name)}</td>"
            f"<td>{item.quantity}</td>"
            f"<td>{format_money(item.line_total)}</td>"
            "</tr>"
            for item in payload.items
        )

        html_body = f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8" />
  <title>Order Confirmation</title>
  <style>{_STYLE}</style>
</head>
<body>
  <div class="email-container">
    <div class="header">
      <h1>Order Confirmed</h1>
      <span>Thanks for your purchase, {escape(customer.name)}!</span>
    </div>
    <div class="section">
      <h2>Shipping To</h2>
      <div class="address-box">
        {escape(customer.name)}<br>
        {escape(address.address or "N/A")}<br>
        {escape(address.city or "N/A")}, {escape(address.country or "N/A")} {escape(address.zip or "N/A")}
      </div>
      <h2>Order #{escape(order_ref)}</h2>
      <table class="items-table">
        <thead><tr><th>Item</th><th>Qty</th><th>Price</th></tr></thead>
        <tbody>{item_rows}</tbody>
      </table>
      <div class="totals">
        <div>Subtotal: {format_money(totals.subtotal)}</div>
        <div>Shipping: {format_money(totals.shipping)}</div>
        <div>Tax: {format_money(totals.taxes)}</div>
        <div class="grand-total">Total: {format_money(totals.grand_total)}</div>
      </div>
      <a href="{escape(order_url)}" class="cta-button">View Order Status</a>
    </div>
    <div class="footer">
      Questions? Contact support@{escape(store_name.lower())}.com<br>
      You'll receive a shipping update soon.
    </div>
  </div>
</body>
</html>
"""

        item_lines = "\n".join(
            f"{item.name} x{item.quantity} - {format_money(item.line_total)}" for item in payload.items
        )

        body = (
            f"Hello {customer.name}!\n\n"
            f"Your order #{order_ref} is confirmed.\n\n"
            "Shipping address:\n"
            f"{customer.name}\n"
            f"{address.address or 'N/A'}\n"
            f"{address.city or 'N/A'}, {address.country or 'N/A'} {address.zip or 'N/A'}\n\n"
            "Items:\n"
            f"{item_lines}\n\n"
            f"Subtotal: {format_money(totals.subtotal)}\n"
            f"Shipping: {format_money(totals.shipping)}\n"
            f"Tax: {format_money(totals.taxes)}\n"
            f"Grand Total: {format_money(totals.grand_total)}\n\n"
            f"View your order: {order_url}\n\n"
            f"You'll receive another email when your order ships. Thank you for shopping with {store_name}!"
        )

        return {
            "subject": f"Order Confirmation - Order #{order_ref}",
            "body": body,
            "html_body": html_body,
        }
