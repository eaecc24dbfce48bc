"""Rebuild the ordered page sequence of one chapter from noisy candidates.

Reader pages embed many numerically identified assets (icons, banners,
covers of other series) next to the actual page images. Assets uploaded
together get a tight block of consecutive storage ids, unrelated ones are
far apart. So the pages are recovered as the largest run of adjacent ids:

1. dedupe by URL (first wins), drop candidates without id;
2. sort by id and cut a new cluster at every gap > `gap_tolerance`;
3. keep the largest cluster (first one on ties);
4. order it by page number when every member has one, else by id.

Everything here is pure; no I/O, no shared state.
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from panel_harvester.core.interfaces import Candidate

logger = logging.getLogger(__name__)

GAP_TOLERANCE = 1


def dedupe_candidates(candidates: Iterable[Candidate]) -> List[Candidate]:
    """Drop repeated URLs keeping the first occurrence, preserving order."""
    seen = set()
    uniq: List[Candidate] = []
    for c in candidates:
        if c.url not in seen:
            seen.add(c.url)
            uniq.append(c)
    return uniq


def cluster_candidates(
    ordered: List[Candidate], gap_tolerance: int = GAP_TOLERANCE
) -> List[List[Candidate]]:
    """Split id-sorted candidates into maximal runs of adjacent ids."""
    if not ordered:
        return []

    clusters: List[List[Candidate]] = []
    current = [ordered[0]]
    for prev, curr in zip(ordered, ordered[1:]):
        if curr.numeric_id - prev.numeric_id <= gap_tolerance:
            current.append(curr)
        else:
            clusters.append(current)
            current = [curr]
    clusters.append(current)
    return clusters


def select_dominant_cluster(clusters: List[List[Candidate]]) -> List[Candidate]:
    """Largest cluster; the first one wins ties."""
    dominant: List[Candidate] = []
    for cluster in clusters:
        if len(cluster) > len(dominant):
            dominant = cluster
    return dominant


def order_cluster(cluster: List[Candidate]) -> List[Candidate]:
    # Purely numeric filenames are the authoritative order when all have one.
    # Colliding page numbers keep their id order (stable sort).
    if cluster and all(c.page_number is not None for c in cluster):
        return sorted(cluster, key=lambda c: c.page_number)
    return sorted(cluster, key=lambda c: c.numeric_id)


def reconstruct(
    candidates: Iterable[Candidate], gap_tolerance: int = GAP_TOLERANCE
) -> List[str]:
    """Return the ordered page URLs of the dominant cluster (may be empty)."""
    usable = [c for c in dedupe_candidates(candidates) if c.numeric_id is not None]
    if not usable:
        return []

    ordered = sorted(usable, key=lambda c: c.numeric_id)
    clusters = cluster_candidates(ordered, gap_tolerance)
    dominant = select_dominant_cluster(clusters)
    logger.debug(
        "Found %d clusters; largest has %d of %d candidates",
        len(clusters),
        len(dominant),
        len(ordered),
    )
    return [c.url for c in order_cluster(dominant)]
