from __future__ import annotations

import io

import qrcode

from rsvp_app.core.config import settings


def build_rsvp_url(event_id: str) -> str:
    """Link guests open to answer the invitation."""
    return f"{settings.PUBLIC_BASE_URL}/rsvp/{event_id}"


def render_qr_png(data: str, box_size: int = 10, border: int = 4) -> bytes:
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=box_size,
        border=border,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")
    img_buffer = io.BytesIO()
    img.save(img_buffer, format="PNG")
    return img_buffer.getvalue()
