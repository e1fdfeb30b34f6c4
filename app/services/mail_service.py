import logging
import smtplib
from email.message import EmailMessage
from pathlib import Path
from typing import Optional, Union

from app.core.errors import MailDeliveryError

logger = logging.getLogger(__name__)

INVOICE_SUBJECT = "🧾 Your Order Invoice"
INVOICE_BODY = "Attached is your invoice for the recent order. Thank you!"


class InvoiceMailer:
    """Sends invoice PDFs through an authenticated SMTP relay (STARTTLS)."""

    def __init__(
        self,
        host: str,
        port: int,
        username: Optional[str],
        password: Optional[str],
        sender: Optional[str] = None,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender or username

    def build_message(self, to_address: str, file_path: Union[str, Path]) -> EmailMessage:
        message = EmailMessage()
        message["Subject"] = INVOICE_SUBJECT
        message["From"] = self.sender
        message["To"] = to_address
        message.set_content(INVOICE_BODY)
        message.add_attachment(
            Path(file_path).read_bytes(),
            maintype="application",
            subtype="pdf",
            filename="invoice.pdf",
        )
        return message

    def send(self, to_address: str, file_path: Union[str, Path]) -> None:
        if not self.username or not self.password:
            raise MailDeliveryError("SMTP credentials are not configured")

        try:
            message = self.build_message(to_address, file_path)
            with smtplib.SMTP(self.host, self.port) as smtp:
                smtp.starttls()
                smtp.login(self.username, self.password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            raise MailDeliveryError(f"Failed to send invoice to {to_address}: {e}") from e

        logger.info(f"Invoice {file_path} sent to {to_address}")
