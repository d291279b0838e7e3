# utils/linkedin.py
from urllib.parse import urlencode

SHARE_URL = "https://www.linkedin.com/sharing/share-offsite/"


def build_share_url(page_url: str) -> str:
    """LinkedIn share-offsite link for a public portfolio page."""
    return f"{SHARE_URL}?{urlencode({'url': page_url})}"
