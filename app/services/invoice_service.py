# app/services/invoice_service.py - PDF invoices with remote product images

import io
import logging
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import List, Sequence, Union
from xml.sax.saxutils import escape

import httpx
from PIL import Image as PILImage
from reportlab.lib.enums import TA_CENTER, TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Image, Paragraph, SimpleDocTemplate, Spacer

from app.core.errors import InvoiceRenderError

logger = logging.getLogger(__name__)

IMAGE_SIZE = 100  # points
MARGIN = 50


@dataclass
class InvoiceItem:
    product_id: str
    img_url: str
    quantity: int
    price: float


def to_png(image_bytes: bytes) -> bytes:
    """Decode any Pillow readable image and re-encode it as PNG."""
    image = PILImage.open(io.BytesIO(image_bytes))
    image.load()
    if image.mode not in ("RGB", "RGBA"):
        image = image.convert("RGBA" if "A" in image.getbands() or "transparency" in image.info else "RGB")
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


class InvoiceRenderer:
    def __init__(self, http_client: httpx.Client, store_name: str = "Smart Cart"):
        self.http_client = http_client
        self.store_name = store_name

        styles = getSampleStyleSheet()
        self.body = styles["Normal"]
        self.heading = ParagraphStyle("InvoiceHeading", parent=styles["Title"], alignment=TA_CENTER)
        self.subtitle = ParagraphStyle("InvoiceSubtitle", parent=styles["Normal"], alignment=TA_CENTER)
        self.total_style = ParagraphStyle("InvoiceTotal", parent=styles["Heading3"], alignment=TA_RIGHT)

    def fetch_image(self, url: str) -> Image:
        response = self.http_client.get(url)
        response.raise_for_status()
        png = to_png(response.content)
        return Image(io.BytesIO(png), width=IMAGE_SIZE, height=IMAGE_SIZE)

    def build_story(self, items: Sequence[InvoiceItem], total: Union[float, Decimal]) -> list:
        story = [
            Paragraph(f"{self.store_name} - Modern eCommerce", self.subtitle),
            Paragraph("Your trusted online store", self.subtitle),
            Spacer(1, 24),
            Paragraph("Order Invoice", self.heading),
            Spacer(1, 12),
        ]

        for index, item in enumerate(items, start=1):
            story.append(Paragraph(f"Item {index}:", self.body))
            story.append(Paragraph(f"Product ID: {escape(item.product_id)}", self.body))
            story.append(Paragraph(f"Quantity: {item.quantity}", self.body))
            story.append(Paragraph(f"Price: ${item.price}", self.body))

            try:
                story.append(self.fetch_image(item.img_url))
            except (httpx.HTTPError, httpx.InvalidURL, OSError, ValueError, PILImage.DecompressionBombError) as e:
                # Unreachable or undecodable images never abort the document
                logger.warning(f"Invoice image fetch failed for {item.img_url}: {e}")
                story.append(Paragraph(f"(Failed to load image from: {escape(item.img_url)})", self.body))

            story.append(Spacer(1, 12))

        story.append(Paragraph(f"Total: ${float(total):.2f}", self.total_style))
        return story

    def render(self, items: List[InvoiceItem], total: Union[float, Decimal], destination: Union[str, Path]) -> Path:
        path = Path(destination)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise InvoiceRenderError(f"Could not create invoice directory {path.parent}: {e}") from e

        doc = SimpleDocTemplate(
            str(path),
            pagesize=A4,
            leftMargin=MARGIN,
            rightMargin=MARGIN,
            topMargin=MARGIN,
            bottomMargin=MARGIN,
            title="Order Invoice",
        )
        try:
            doc.build(self.build_story(items, total))
        except OSError as e:
            raise InvoiceRenderError(f"Could not write invoice to {path}: {e}") from e

        logger.info(f"Invoice written to {path} ({len(items)} item(s))")
        return path
