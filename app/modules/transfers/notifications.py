# app/modules/transfers/notifications.py
from datetime import datetime
from email.message import EmailMessage
from html import escape
from typing import List, Optional
import logging

import aiosmtplib

from app.config.settings import Settings, TransferRoute, settings as default_settings
from .schemas import TransferDocument

logger = logging.getLogger(__name__)


class NotificationDeliveryError(Exception):
    """The mail relay did not accept the transfer notification"""


def resolve_recipients(
    transfer_from: str,
    transfer_to: str,
    officer_email: str,
    routes: List[TransferRoute]
) -> List[str]:
    """The inventory officer always receives the mail; routes add extra
    recipients for an exact (from, to) location pair."""
    recipients = [officer_email] if officer_email else []
    for route in routes:
        if route.transfer_from == transfer_from and route.transfer_to == transfer_to:
            for address in route.recipients:
                if address and address not in recipients:
                    recipients.append(address)
    return recipients


def _format_quantity(value) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _format_timestamp(timestamp: str) -> str:
    try:
        parsed = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except ValueError:
        return timestamp
    return parsed.strftime("%m/%d/%Y, %I:%M:%S %p %Z")


def render_transfer_email(transfer_doc: TransferDocument) -> str:
    """HTML body of the transfer notification"""
    cell = 'style="padding: 8px;"'
    rows = "".join(
        f"""
            <tr>
              <td {cell}>{escape(item.product)}</td>
              <td {cell}>{escape(item.sku)}</td>
              <td {cell}>{_format_quantity(item.bottles)}</td>
              <td {cell}>{_format_quantity(item.cases)}</td>
            </tr>"""
        for item in transfer_doc.items
    )

    notes_block = ""
    if transfer_doc.notes:
        notes_block = f"""
        <h3>Additional Notes:</h3>
        <p style="background-color: #f8f9fa; padding: 15px; border-left: 4px solid #667eea; margin: 20px 0;">
          {escape(transfer_doc.notes)}
        </p>"""

    summary = transfer_doc.summary
    return f"""
        <h2>Inventory Transfer Request</h2>
        <p><strong>Transfer ID:</strong> {escape(transfer_doc.transfer_id)}</p>
        <p><strong>Date:</strong> {escape(_format_timestamp(transfer_doc.timestamp))}</p>
        <p><strong>From:</strong> {escape(transfer_doc.transfer_from)}</p>
        <p><strong>To:</strong> {escape(transfer_doc.transfer_to)}</p>
        <p><strong>Authorized By:</strong> {escape(transfer_doc.authorized_by or 'Not specified')}</p>

        <h3>Items to Transfer:</h3>
        <table border="1" style="border-collapse: collapse; width: 100%;">
          <tr>
            <th {cell}>Product</th>
            <th {cell}>SKU</th>
            <th {cell}>Bottles</th>
            <th {cell}>Cases (9L)</th>
          </tr>{rows}
        </table>
        {notes_block}

        <h3>Summary:</h3>
        <p><strong>Total SKUs:</strong> {summary.total_items}</p>
        <p><strong>Total Bottles/Units:</strong> {_format_quantity(summary.total_bottles)}</p>
        <p><strong>Total Cases:</strong> {_format_quantity(summary.total_cases)}</p>
    """


class TransferNotifier:
    """Sends transfer documents to inventory staff through the SMTP relay"""

    def __init__(self, config: Optional[Settings] = None):
        self.config = config or default_settings

    def recipients_for(self, transfer_doc: TransferDocument) -> List[str]:
        return resolve_recipients(
            transfer_doc.transfer_from,
            transfer_doc.transfer_to,
            self.config.inventory_officer_email,
            self.config.recipient_routes
        )

    def build_message(self, transfer_doc: TransferDocument) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.config.sender_address or ""
        message["To"] = ", ".join(self.recipients_for(transfer_doc))
        message["Subject"] = f"Inventory Transfer Request - {transfer_doc.transfer_id}"
        message.set_content(
            f"Inventory transfer {transfer_doc.transfer_id} from "
            f"{transfer_doc.transfer_from} to {transfer_doc.transfer_to}."
        )
        message.add_alternative(render_transfer_email(transfer_doc), subtype="html")
        return message

    async def send_transfer_email(self, transfer_doc: TransferDocument) -> None:
        message = self.build_message(transfer_doc)
        if not message["To"]:
            raise NotificationDeliveryError("No recipients configured for transfer notifications")
        if not message["From"]:
            raise NotificationDeliveryError("No sender address configured for transfer notifications")

        try:
            await aiosmtplib.send(
                message,
                hostname=self.config.email_host,
                port=self.config.email_port,
                username=self.config.email_user,
                password=self.config.email_pass,
                use_tls=False
            )
        except Exception as e:
            logger.error(f"Error sending email: {e}")
            raise NotificationDeliveryError(str(e)) from e

        logger.info(f"Transfer email sent successfully to {message['To']}")


def get_notifier() -> TransferNotifier:
    """Notifier dependency for FastAPI"""
    return TransferNotifier()
