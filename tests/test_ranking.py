"""Test trust ranking of candidate pages."""

from artlens.evidence.models import WebPage
from artlens.web.ranking import is_trusted, rank_urls


def _pages(*urls):
    return [WebPage(url=u) for u in urls]


def test_trusted_first():
    ranked = rank_urls(_pages(
        "https://shop.example.com/poster",
        "https://en.wikipedia.org/wiki/The_Starry_Night",
        "https://blog.example.org/post",
        "https://www.moma.org/collection/works/79802",
    ))
    assert ranked == [
        "https://en.wikipedia.org/wiki/The_Starry_Night",
        "https://www.moma.org/collection/works/79802",
        "https://shop.example.com/poster",
        "https://blog.example.org/post",
    ]


def test_ties_keep_input_order():
    urls = ["https://a.example/1", "https://b.example/2", "https://c.example/3"]
    assert rank_urls(_pages(*urls)) == urls


def test_duplicates_dropped():
    ranked = rank_urls(_pages("https://x.example/a", "https://x.example/a", "https://museodelprado.es/obra"))
    assert ranked == ["https://museodelprado.es/obra", "https://x.example/a"]


def test_heritage_terms_are_trusted():
    assert is_trusted("https://www.catedraldesevilla.es/historia")
    assert is_trusted("https://whc.unesco.org/en/list/383")
    assert is_trusted("https://www.Musee-Orsay.fr/fr/oeuvres")
    assert not is_trusted("https://www.pinterest.com/pin/123")


def test_custom_trusted_list():
    ranked = rank_urls(_pages("https://a.example", "https://trusted.example"), trusted=["trusted"])
    assert ranked == ["https://trusted.example", "https://a.example"]


def test_empty():
    assert rank_urls([]) == []
