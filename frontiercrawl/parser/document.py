from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Document:
    """Result of parsing fetched content."""

    location: str
    mime_type: str
    charset: str
    title: Optional[str]
    text: str
    links: Tuple[Tuple[str, str], ...] = ()
