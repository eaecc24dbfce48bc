from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class Candidate:
    """One extracted asset reference.

    `numeric_id` is the storage/media id embedded in the URL; candidates
    without one cannot be placed in a sequence. `page_number` is only set
    when the filename itself is a plain number.
    """

    url: str
    numeric_id: Optional[int] = None
    page_number: Optional[int] = None


class ChapterSource(ABC):
    """
    Contract every source plugin follows.

    The flow only knows these methods, so adding a new site never changes
    the flow.
    """

    @abstractmethod
    def chapter_url(self, chapter_id: str) -> str:
        """Absolute URL of the reader page for `chapter_id`."""
        raise NotImplementedError()

    @abstractmethod
    def chapter_pages(self, html: str) -> List[str]:
        """
        Return the ordered page image URLs found in a chapter page body.
        An empty list means "no content found", not an error.
        """
        raise NotImplementedError()
