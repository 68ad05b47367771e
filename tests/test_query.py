from __future__ import annotations

import itertools

from printduka_sdk.filter_state import FilterSnapshot, FilterStore
from printduka_sdk.query import QueryKey, build_query_key, encode_query
from printduka_sdk.resources import DELIVERIES, LEADS, LPOS, PRODUCTS, QUOTES


def _encode(store: FilterStore) -> str:
    return encode_query(build_query_key(store.descriptor, store.snapshot()))


def test_lpo_status_filter_then_reset() -> None:
    store = FilterStore(LPOS, debounce_ms=0)
    store.set_filter("status", "pending")

    assert _encode(store) == "status=pending&page=1&page_size=20"

    store.reset()

    assert _encode(store) == "page=1&page_size=20"


def test_order_of_filter_edits_does_not_change_query() -> None:
    edits = [("status", "staged"), ("method", "courier"), ("dateFrom", "2024-01-01"), ("urgentOnly", True)]
    encoded = set()
    for order in itertools.permutations(edits):
        store = FilterStore(DELIVERIES, debounce_ms=0)
        for name, value in order:
            store.set_filter(name, value)
        encoded.add(_encode(store))

    assert encoded == {
        "status=staged&mark_urgent=true&job__delivery_method=courier&created_at__gte=2024-01-01&page=1&page_size=20"
        "&ordering=-created_at"
    }


def test_semantically_equal_snapshots_share_a_key() -> None:
    first = FilterStore(DELIVERIES, debounce_ms=0)
    first.set_filter("status", "delivered")
    first.set_filter("stagingLocation", "shelf-a")
    first.set_filter("stagingLocation", "all")

    second = FilterStore(DELIVERIES, debounce_ms=0)
    second.set_filter("status", "delivered")

    assert build_query_key(DELIVERIES, first.snapshot()) == build_query_key(DELIVERIES, second.snapshot())


def test_unset_sentinels_are_omitted() -> None:
    snapshot = FilterSnapshot.from_values(
        DELIVERIES,
        {"status": "all", "search": "   ", "dateFrom": "", "dateTo": None, "ordering": ""},
    )

    query = encode_query(build_query_key(DELIVERIES, snapshot))

    assert query == "page=1&page_size=20&ordering=-created_at"


def test_text_is_stripped_and_dates_pass_verbatim() -> None:
    snapshot = FilterSnapshot.from_values(
        PRODUCTS,
        {"search": "  business cards ", "category": " Print ", "status": "published"},
        page=2,
        page_size=10,
    )

    query = encode_query(build_query_key(PRODUCTS, snapshot))

    assert query == "search=business+cards&status=published&primary_category=Print&page=2&page_size=10"

    lpo = FilterSnapshot.from_values(LPOS, {"dateFrom": "01/02/2024", "dateTo": "2024-02-30"})
    assert "created_at__gte=01%2F02%2F2024" in encode_query(build_query_key(LPOS, lpo))
    assert "created_at__lte=2024-02-30" in encode_query(build_query_key(LPOS, lpo))


def test_ordering_goes_last_verbatim() -> None:
    snapshot = FilterSnapshot.from_values(LPOS, {"ordering": "-total_amount", "status": "approved"})

    assert encode_query(build_query_key(LPOS, snapshot)) == (
        "status=approved&page=1&page_size=20&ordering=-total_amount"
    )


def test_leads_quotes_and_deliveries_always_order_newest_first() -> None:
    leads = encode_query(build_query_key(LEADS, FilterSnapshot.from_values(LEADS, {"source": "Cold Call"})))
    quotes = encode_query(build_query_key(QUOTES, FilterSnapshot.from_values(QUOTES, {})))

    assert leads == "source=Cold+Call&page=1&page_size=20&ordering=-created_at"
    assert quotes == "page=1&page_size=20&ordering=-created_at"

    deliveries = encode_query(build_query_key(DELIVERIES, FilterSnapshot.from_values(DELIVERIES)))
    assert deliveries == "page=1&page_size=20&ordering=-created_at"

    by_date = FilterSnapshot.from_values(DELIVERIES, {"ordering": "delivery_date"})
    assert encode_query(build_query_key(DELIVERIES, by_date)) == "page=1&page_size=20&ordering=delivery_date"


def test_invalid_choice_values_pass_through() -> None:
    snapshot = FilterSnapshot.from_values(LPOS, {"status": "not-a-status"})

    assert "status=not-a-status" in encode_query(build_query_key(LPOS, snapshot))


def test_query_key_is_hashable_and_pages() -> None:
    key = QueryKey("vendors", (("active", "true"),), page=1, page_size=20)

    assert {key: 1}[QueryKey("vendors", (("active", "true"),), 1, 20)] == 1
    assert key.with_page(0).page == 1
    assert encode_query(key.with_page(3)) == "active=true&page=3&page_size=20"
