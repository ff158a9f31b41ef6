import logging
from typing import BinaryIO, Callable, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from frontiercrawl.exceptions import ParserError
from frontiercrawl.parser.document import Document

logger = logging.getLogger(__name__)


class HtmlParser:
    name = "HTML Parser"
    supported_mime_types = {
        "text/html": "htm,html,xhtml",
        "application/xhtml+xml": "xhtml",
    }

    def __init__(self, soup_factory: Optional[Callable[[str], BeautifulSoup]] = None):
        self._soup_factory = soup_factory or (lambda html: BeautifulSoup(html, "html.parser"))

    def parse(self, location: str, mime_type: str, charset: Optional[str], source: BinaryIO, stop_event=None) -> Document:
        charset = charset or "utf-8"
        try:
            html = source.read().decode(charset, errors="replace")
        except LookupError as e:
            raise ParserError(f"Unknown charset {charset}", location) from e
        try:
            soup = self._soup_factory(html)
        except Exception as e:
            logger.exception("Error parsing HTML from %s", location)
            raise ParserError(f"Unable to parse HTML: {e}", location) from e

        title = soup.title.get_text(strip=True) if soup.title else None
        for element in soup.find_all(["script", "style", "noscript"]):
            element.decompose()
        links = []
        for a in soup.find_all("a", href=True):
            links.append((urljoin(location, a.get("href")), a.get_text(strip=True)))
        return Document(
            location=location,
            mime_type=mime_type,
            charset=charset,
            title=title,
            text=soup.get_text(separator=" ", strip=True),
            links=tuple(links),
        )
