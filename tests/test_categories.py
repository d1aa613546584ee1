"""Test period/style to category inference."""

from artlens.catalog.categories import CATEGORY_KEYWORDS, UNKNOWN_CATEGORY, map_period_to_category


def test_exact_category_id():
    assert map_period_to_category("Renacimiento") == "renacimiento"
    assert map_period_to_category("cubismo") == "cubismo"
    assert map_period_to_category("Ukiyo-e") == "ukiyo-e"


def test_keyword_match_any_language():
    assert map_period_to_category("Impressionism") == "impresionismo"
    assert map_period_to_category("Impressionnisme") == "impresionismo"
    assert map_period_to_category("Gótico") == "arte-gotico"


def test_keyword_inside_period():
    assert map_period_to_category("Late Baroque, 17th c.") == "barroco"
    assert map_period_to_category("Vincent van Gogh") == "post-impressionismo"


def test_first_hit_wins():
    # "barroco" is listed before "barroco-espanol"
    assert map_period_to_category("Barroco español") == "barroco"


def test_unknown():
    assert map_period_to_category("xyzzy") == UNKNOWN_CATEGORY
    assert map_period_to_category("") == UNKNOWN_CATEGORY
    assert map_period_to_category(None) == UNKNOWN_CATEGORY
    assert map_period_to_category("   ") == UNKNOWN_CATEGORY


def test_table_shape():
    assert len(CATEGORY_KEYWORDS) > 100
    assert all(keywords for keywords in CATEGORY_KEYWORDS.values())
