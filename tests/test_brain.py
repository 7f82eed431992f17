from decimal import Decimal

from orderdesk.voice.brain import confirm, drop_unmatched, resolve, review, search_catalog
from orderdesk.voice.models import CartLine, LineSource, ParsedPhrase
from orderdesk.voice.nlp import tokenize


def _by_id(catalog, iid):
    return next(it for it in catalog if it.id == iid)


def test_resolve_auto_matches(catalog):
    lines = resolve(tokenize("idli two, masala idli four, vada one"), catalog, {})
    assert [(x.catalog_item_id, x.quantity, x.source) for x in lines] == [
        ("idli", 2, LineSource.AUTO_MATCHED),
        ("masala-idli", 4, LineSource.AUTO_MATCHED),
        ("vada", 1, LineSource.AUTO_MATCHED),
    ]
    assert lines[1].display_name == "Masala Idli"
    assert lines[1].unit_price == Decimal("60")


def test_override_wins_over_automatic_match(catalog):
    phrases = tokenize("idli two")
    lines = resolve(phrases, catalog, {0: _by_id(catalog, "plain-dosa")})
    assert lines[0].catalog_item_id == "plain-dosa"
    assert lines[0].display_name == "Plain Dosa"
    assert lines[0].quantity == 2
    assert lines[0].source == LineSource.USER_SELECTED


def test_unmatched_phrase_is_kept_as_data(catalog):
    [line] = resolve([ParsedPhrase(raw_text="qqq 3", quantity=3, name="qqq")], catalog, None)
    assert line.catalog_item_id is None
    assert line.display_name == "qqq"
    assert line.unit_price == Decimal("0")
    assert line.quantity == 3
    assert line.source == LineSource.UNMATCHED


def test_one_line_per_phrase(catalog):
    phrases = tokenize("idli, idli, qqq, vada")
    assert len(resolve(phrases, catalog, {})) == len(phrases)


def test_out_of_range_overrides_are_ignored(catalog):
    lines = resolve(tokenize("vada"), catalog, {5: _by_id(catalog, "idli"), -1: _by_id(catalog, "idli")})
    assert [x.catalog_item_id for x in lines] == ["vada"]


def test_threshold_is_respected(catalog):
    phrases = tokenize("vadai")
    assert resolve(phrases, catalog, {})[0].source == LineSource.AUTO_MATCHED
    assert resolve(phrases, catalog, {}, threshold=0.95)[0].source == LineSource.UNMATCHED


def test_drop_unmatched(catalog):
    lines = resolve(tokenize("idli, qqq"), catalog, {})
    kept, dropped = drop_unmatched(lines)
    assert [x.catalog_item_id for x in kept] == ["idli"]
    assert [x.display_name for x in dropped] == ["qqq"]


def test_review_attaches_suggestions_only_to_unmatched(catalog):
    rows = review("idli two, dosha, qqq", catalog)
    assert [r.index for r in rows] == [0, 1, 2]

    assert rows[0].matched and rows[0].match.id == "idli"
    assert rows[0].suggestions == []

    assert rows[1].match is None
    assert 0 < len(rows[1].suggestions) <= 3
    scores = [s.score for s in rows[1].suggestions]
    assert scores == sorted(scores, reverse=True)

    assert rows[2].match is None
    assert rows[2].suggestions == []


def test_review_empty_utterance(catalog):
    assert review("", catalog) == []


def test_search_catalog(catalog):
    assert [it.id for it in search_catalog("masala", catalog, 5)][:2] == ["masala-idli", "masala-dosa"]
    assert search_catalog("qqq", catalog) == []
    assert len(search_catalog("a", catalog, 2)) <= 2


def test_confirm_merges_and_reports_dropped(catalog):
    cart = [CartLine(catalog_item_id="idli", name="Idli", unit_price=Decimal("40"), quantity=1)]
    phrases = tokenize("idli two, dosha, extra sauce, idli three")

    result = confirm(phrases, catalog, {1: _by_id(catalog, "plain-dosa")}, cart)

    assert result.cart is cart
    assert [(x.catalog_item_id, x.quantity) for x in cart] == [("idli", 6), ("plain-dosa", 1)]
    assert [x.display_name for x in result.dropped] == ["extra sauce"]
    assert len(result.added) == 3


def test_confirm_result_shares_the_callers_cart(catalog):
    cart = []
    result = confirm(tokenize("vada"), catalog, {}, cart)
    result.cart.append(CartLine(name="extra sauce", quantity=1))
    assert [x.name for x in cart] == ["Vada", "extra sauce"]


def test_confirm_with_nothing_matched_leaves_cart_alone(catalog):
    cart = [CartLine(name="extra sauce", quantity=1)]
    result = confirm(tokenize("qqq, zzz"), catalog, {}, cart)
    assert result.added == []
    assert len(result.dropped) == 2
    assert [(x.name, x.quantity) for x in cart] == [("extra sauce", 1)]
