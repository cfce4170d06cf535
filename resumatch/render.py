"""HTML fragments for the Streamlit UI.

Posting fields come from the job-search upstream and are escaped before they
are placed into markup rendered with ``unsafe_allow_html``.
"""
from __future__ import annotations

from html import escape
from urllib.parse import urlsplit

from resumatch.models import LivePosting

_SAFE_SCHEMES = {"http", "https"}


def safe_href(url: str) -> str:
    """Escaped link target; anything other than http(s) becomes ``#``."""
    if urlsplit((url or "").strip()).scheme.lower() not in _SAFE_SCHEMES:
        return "#"
    return escape(url.strip(), quote=True)


def posting_card_html(posting: LivePosting) -> str:
    return (
        f'<div class="live-job"><strong>{escape(posting.title)}</strong><br>'
        f"{escape(posting.location)} · {escape(posting.employment_type)} · "
        f"Posted {escape(posting.posted_label)}<br>"
        f'<a href="{safe_href(posting.apply_url)}" target="_blank" rel="noopener noreferrer">Apply</a></div>'
    )
