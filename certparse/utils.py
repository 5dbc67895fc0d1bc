"""Small formatting helpers."""


def format_serial(data: bytes) -> str:
    """Format bytes as a colon-separated lower-case hex string."""
    return ":".join(f"{b:02x}" for b in data)