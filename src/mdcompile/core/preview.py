"""Preview extraction: the first paragraph of rendered HTML"""

from bs4 import BeautifulSoup


PREVIEW_SELECTOR = "p"


def extract_preview(html: str, selector: str = PREVIEW_SELECTOR) -> str:
    """Return the inner HTML of the first element matching selector, or '' if none."""
    soup = BeautifulSoup(html, "html.parser")
    first = soup.select_one(selector)
    return first.decode_contents() if first is not None else ""
