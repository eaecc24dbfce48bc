"""Turn raw asset URLs into `Candidate` objects for the sequencer."""

from __future__ import annotations

import re
from typing import Iterable, List, Optional
from urllib.parse import urlparse

from panel_harvester.core.interfaces import Candidate

DEFAULT_DENYLIST = ("logo", "avatar", "icon", "banner")
DEFAULT_ID_PATTERN = r"/media/(\d+)/"

_OPTIMIZED_SUFFIX = re.compile(r"-optimized$")


def is_denied(url: str, denylist: Iterable[str] = DEFAULT_DENYLIST) -> bool:
    low = url.lower()
    return any(word in low for word in denylist)


def page_number_from_url(url: str) -> Optional[int]:
    """Page number when the filename stem is purely numeric (`07.webp` -> 7)."""
    name = (urlparse(url).path or "").split("/")[-1]
    stem = _OPTIMIZED_SUFFIX.sub("", name.split(".")[0])
    if stem.isdigit():
        return int(stem)
    return None


def parse_candidate(url: str, id_pattern: str = DEFAULT_ID_PATTERN) -> Candidate:
    m = re.search(id_pattern, url)
    numeric_id = int(m.group(1)) if m else None
    if numeric_id == 0:
        # 0 is what storage uses for "no id"
        numeric_id = None
    return Candidate(
        url=url, numeric_id=numeric_id, page_number=page_number_from_url(url)
    )


def build_candidates(
    urls: Iterable[str],
    host_hints: Iterable[str] = (),
    denylist: Iterable[str] = DEFAULT_DENYLIST,
    id_pattern: str = DEFAULT_ID_PATTERN,
) -> List[Candidate]:
    """Keep URLs on a content host (if hints given) and not denylisted."""
    hints = tuple(host_hints)
    deny = tuple(denylist)
    found: List[Candidate] = []
    for url in urls:
        if hints and not any(h in url for h in hints):
            continue
        if is_denied(url, deny):
            continue
        found.append(parse_candidate(url, id_pattern))
    return found
