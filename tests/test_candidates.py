from panel_harvester.core.scraping.candidates import (
    build_candidates,
    is_denied,
    page_number_from_url,
    parse_candidate,
)
from panel_harvester.core.scraping.normalizer import absolutize_protocol, normalize_url
from panel_harvester.core.scraping.parser import extract_asset_urls, extract_img_sources


def test_extract_asset_urls_reads_markup_and_escaped_payloads():
    html = r"""
    <img src="https://cdn.example/storage/media/10/01.webp">
    <script>push("{\"u\":\"https:\/\/cdn.example\/storage\/media\/11\/02.jpg\"}")</script>
    <script>push("{\"u\":\"https://cdn.example/storage/media/12/03.png\"}")</script>
    <a href="https://cdn.example/file.pdf">pdf</a>
    """
    urls = extract_asset_urls(html)
    assert urls == [
        "https://cdn.example/storage/media/10/01.webp",
        "https://cdn.example/storage/media/11/02.jpg",
        "https://cdn.example/storage/media/12/03.png",
    ]


def test_extract_asset_urls_dedupes_in_first_seen_order():
    html = "https://a.example/2.jpg https://a.example/1.jpg https://a.example/2.jpg"
    assert extract_asset_urls(html) == ["https://a.example/2.jpg", "https://a.example/1.jpg"]


def test_extract_img_sources_prefers_data_src():
    html = """
    <div class="chapter-image"><img data-src="//cdn.example/p1.jpg" src="loading.svg"></div>
    <div class="chapter-image"><img src="https://cdn.example/p2.jpg"></div>
    <div class="ad"><img src="https://ads.example/x.jpg"></div>
    """
    assert extract_img_sources(html, ".chapter-image img") == [
        "https://cdn.example/p1.jpg",
        "https://cdn.example/p2.jpg",
    ]
    assert len(extract_img_sources(html)) == 3


def test_normalizer_fixes_protocol_relative_and_tracking():
    assert absolutize_protocol("//cdn.example/a.jpg") == "https://cdn.example/a.jpg"
    assert absolutize_protocol("https://x/a.jpg") == "https://x/a.jpg"
    assert (
        normalize_url("https://x/a.jpg?utm_source=feed&w=800#top")
        == "https://x/a.jpg?w=800"
    )


def test_page_number_from_numeric_filenames():
    assert page_number_from_url("https://x/media/1/07.webp") == 7
    assert page_number_from_url("https://x/media/1/12-optimized.webp") == 12
    assert page_number_from_url("https://x/media/1/cover.webp") is None
    assert page_number_from_url("https://x/media/1/page-3.webp") is None


def test_parse_candidate_extracts_media_id():
    c = parse_candidate("https://gg.example/storage/media/393435/01.webp")
    assert c.numeric_id == 393435
    assert c.page_number == 1


def test_parse_candidate_without_or_zero_id():
    assert parse_candidate("https://gg.example/img/01.webp").numeric_id is None
    assert parse_candidate("https://gg.example/media/0/01.webp").numeric_id is None


def test_build_candidates_filters_hosts_and_denylist():
    urls = [
        "https://gg.example/storage/media/5/01.webp",
        "https://gg.example/storage/media/6/logo.png",
        "https://gg.example/storage/media/7/Banner-top.webp",
        "https://elsewhere.example/media/8/02.webp",
    ]
    found = build_candidates(urls, host_hints=("gg.example",))
    assert [c.numeric_id for c in found] == [5]


def test_is_denied_is_case_insensitive():
    assert is_denied("https://x/AVATAR.png")
    assert not is_denied("https://x/media/1/01.webp")
