import base64

_SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]


def format_file_size(size_bytes) -> str:
    """Human readable size with 1024 steps, e.g. 1536 -> '1.5 KB'."""
    if not size_bytes:
        return "0 Bytes"
    k = 1024
    i = 0
    while size_bytes >= k ** (i + 1) and i < len(_SIZE_UNITS) - 1:
        i += 1
    value = round(size_bytes / (k ** i), 2)
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {_SIZE_UNITS[i]}"


def to_data_url(data: bytes, mime_type: str) -> str:
    """Inline an uploaded file as a data URL (used for absence proof images)."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type or 'application/octet-stream'};base64,{encoded}"


def points_text(points) -> str:
    if points > 0:
        return f"+{points:g}"
    return f"{points:g}"
