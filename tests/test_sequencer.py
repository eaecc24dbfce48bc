from panel_harvester.core.interfaces import Candidate
from panel_harvester.core.scraping.sequencer import (
    cluster_candidates,
    dedupe_candidates,
    reconstruct,
    select_dominant_cluster,
)


def _c(numeric_id, page=None, url=None):
    return Candidate(
        url=url or f"https://cdn.example/media/{numeric_id}/img.webp",
        numeric_id=numeric_id,
        page_number=page,
    )


def test_empty_input_returns_empty():
    assert reconstruct([]) == []


def test_candidates_without_id_are_ignored():
    candidates = [Candidate(url="https://cdn.example/a.webp"), Candidate(url="b")]
    assert reconstruct(candidates) == []


def test_single_candidate_is_returned_verbatim():
    c = _c(42)
    assert reconstruct([c]) == [c.url]


def test_dominant_cluster_wins_over_distant_assets():
    ids = [5, 6, 7, 100, 150, 8]
    result = reconstruct([_c(i) for i in ids])
    assert result == [_c(i).url for i in (5, 6, 7, 8)]


def test_explicit_page_numbers_override_id_order():
    candidates = [_c(50, page=3), _c(51, page=1), _c(52, page=2)]
    result = reconstruct(candidates)
    assert result == [_c(51).url, _c(52).url, _c(50).url]


def test_partial_page_numbers_fall_back_to_id_order():
    candidates = [_c(12, page=1), _c(10, page=3), _c(11)]
    assert reconstruct(candidates) == [_c(10).url, _c(11).url, _c(12).url]


def test_duplicates_do_not_change_the_result():
    candidates = [_c(i) for i in (3, 1, 2, 40, 41)]
    assert reconstruct(candidates) == reconstruct(candidates + candidates)


def test_dedupe_keeps_first_occurrence():
    first = Candidate(url="u", numeric_id=1, page_number=9)
    second = Candidate(url="u", numeric_id=1, page_number=None)
    assert dedupe_candidates([first, second, first]) == [first]


def test_tie_goes_to_lowest_ids():
    candidates = [_c(i) for i in (20, 21, 1, 2)]
    assert reconstruct(candidates) == [_c(1).url, _c(2).url]


def test_gap_tolerance_is_tunable():
    candidates = [_c(i) for i in (1, 3, 5, 50)]
    assert reconstruct(candidates) == [_c(1).url]
    assert reconstruct(candidates, gap_tolerance=2) == [
        _c(1).url,
        _c(3).url,
        _c(5).url,
    ]


def test_repeated_ids_with_distinct_urls_stay_together():
    a = _c(7, url="https://cdn.example/media/7/a.webp")
    b = _c(7, url="https://cdn.example/media/7/b.webp")
    assert reconstruct([a, b, _c(90)]) == [a.url, b.url]


def test_colliding_page_numbers_pass_through():
    candidates = [_c(30, page=2), _c(31, page=1), _c(32, page=1)]
    assert reconstruct(candidates) == [_c(31).url, _c(32).url, _c(30).url]


def test_cluster_and_select_helpers():
    ordered = [_c(i) for i in (1, 2, 10, 11, 12)]
    clusters = cluster_candidates(ordered)
    assert [[c.numeric_id for c in cl] for cl in clusters] == [[1, 2], [10, 11, 12]]
    assert [c.numeric_id for c in select_dominant_cluster(clusters)] == [10, 11, 12]
    assert cluster_candidates([]) == []
