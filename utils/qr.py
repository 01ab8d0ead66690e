import io
from urllib.parse import urlencode

import qrcode

from domain.constants import PUBLIC_APP_URL


def attendance_url(event_id: str, base_url: str = PUBLIC_APP_URL) -> str:
    """Public check-in link encoded into the attendance QR code."""
    return f"{base_url}/?{urlencode({'page': 'attendance', 'event': event_id})}"


def qr_png(data: str, box_size: int = 10) -> bytes:
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=box_size,
        border=2,
    )
    qr.add_data(data)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def registration_url(audition_id: str, base_url: str = PUBLIC_APP_URL) -> str:
    return f"{base_url}/?{urlencode({'page': 'register', 'audition': audition_id})}"
