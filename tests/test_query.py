import math

from storefront.core.query import (
    apply_filters,
    category_values,
    clamp_limit,
    matches_search,
    paginate,
    sort_products,
)
from storefront.schemas.query import ProductFilters, SortOption


def ids(products):
    return [p.id for p in products]


def test_empty_filters_restrict_nothing(priced_catalog):
    result = apply_filters(priced_catalog, ProductFilters())
    assert ids(result) == ids(priced_catalog)


def test_no_filters_returns_everything(priced_catalog):
    assert ids(apply_filters(priced_catalog, None)) == ids(priced_catalog)


def test_price_range_is_inclusive(priced_catalog):
    result = apply_filters(priced_catalog, ProductFilters(price_range=(60, 90)))
    assert ids(result) == ["p60", "p70", "p90"]


def test_size_filter_needs_one_overlapping_size(make_product):
    rows = [
        make_product("s1", "Tee", sizes=["S", "M"]),
        make_product("s2", "Hoodie", sizes=["L"]),
        make_product("s3", "Cap"),
    ]
    result = apply_filters(rows, ProductFilters(sizes=frozenset({"M", "XL"})))
    assert ids(result) == ["s1"]


def test_color_filter_matches_row_color(cube_catalog):
    result = apply_filters(cube_catalog, ProductFilters(colors=frozenset({"black", "red"})))
    assert ids(result) == ["a2", "b1"]


def test_subcategory_filter_ignores_case(make_product):
    rows = [
        make_product("x1", "Lamp", subcategory="Lighting"),
        make_product("x2", "Shelf", subcategory="Shelving"),
    ]
    result = apply_filters(rows, ProductFilters(subcategories=frozenset({"lighting"})))
    assert ids(result) == ["x1"]


def test_category_group_expands_to_categories(make_product):
    rows = [
        make_product("g1", "Cube", category="Geometric"),
        make_product("g2", "Shelf", category="Modular"),
        make_product("g3", "Lamp", category="Premium"),
    ]
    assert ids(apply_filters(rows, ProductFilters(category="Men"))) == ["g2"]
    assert ids(apply_filters(rows, ProductFilters(category="women"))) == ["g1", "g3"]


def test_unknown_category_group_restricts_nothing(priced_catalog):
    assert category_values("Kids") == frozenset()
    assert len(apply_filters(priced_catalog, ProductFilters(category="Kids"))) == len(priced_catalog)


def test_on_sale_and_in_stock_filters(make_product):
    rows = [
        make_product("o1", "Sphere", original_price=80.0, price=60.0),
        make_product("o2", "Cube", in_stock=False, original_price=20.0),
        make_product("o3", "Block"),
    ]
    result = apply_filters(rows, ProductFilters(on_sale=True, in_stock_only=True))
    assert ids(result) == ["o1"]


def test_sort_by_price(priced_catalog):
    reversed_rows = list(reversed(priced_catalog))
    assert ids(sort_products(reversed_rows, SortOption.PRICE_ASC)) == ["p30", "p60", "p70", "p90", "p120"]
    assert ids(sort_products(priced_catalog, "price-desc")) == ["p120", "p90", "p70", "p60", "p30"]


def test_sort_is_stable_for_ties(make_product):
    rows = [
        make_product("t1", "B", price=5.0),
        make_product("t2", "A", price=5.0),
        make_product("t3", "C", price=1.0),
    ]
    assert ids(sort_products(rows, SortOption.PRICE_ASC)) == ["t3", "t1", "t2"]
    assert ids(sort_products(rows, SortOption.PRICE_DESC)) == ["t1", "t2", "t3"]


def test_sort_by_name_and_rating(make_product):
    rows = [
        make_product("n1", "Bravo", rating=4.0),
        make_product("n2", "Alpha"),
        make_product("n3", "Charlie", rating=4.8),
    ]
    assert ids(sort_products(rows, SortOption.NAME_ASC)) == ["n2", "n1", "n3"]
    assert ids(sort_products(rows, SortOption.NAME_DESC)) == ["n3", "n1", "n2"]
    # a missing rating counts as zero
    assert ids(sort_products(rows, SortOption.RATING)) == ["n3", "n1", "n2"]


def test_relevance_and_unknown_sort_keep_order(priced_catalog):
    shuffled = [priced_catalog[i] for i in (3, 0, 4, 1, 2)]
    assert ids(sort_products(shuffled, SortOption.RELEVANCE)) == ids(shuffled)
    assert ids(sort_products(shuffled, "cheapest-first")) == ids(shuffled)
    assert SortOption.parse("cheapest-first") == SortOption.RELEVANCE


def test_filter_sort_paginate(priced_catalog):
    filtered = apply_filters(priced_catalog, ProductFilters(price_range=(50, 100)))
    page = paginate(sort_products(filtered, SortOption.PRICE_DESC), page=1, page_size=2)

    assert ids(page.items) == ["p90", "p70"]
    assert page.total == 3
    assert page.total_pages == 2
    assert page.has_next is True
    assert page.has_previous is False


def test_pagination_invariants(priced_catalog):
    for page_size in (1, 2, 3, 7):
        total_pages = math.ceil(len(priced_catalog) / page_size)
        for page_number in range(1, total_pages + 1):
            page = paginate(priced_catalog, page_number, page_size)
            assert len(page.items) <= page_size
            assert page.total_pages == total_pages
            assert page.has_next == (page_number < total_pages)
            assert page.has_previous == (page_number > 1)


def test_page_past_the_end_is_empty(priced_catalog):
    page = paginate(priced_catalog, page=5, page_size=2)
    assert page.items == []
    assert page.total == 5
    assert page.total_pages == 3
    assert page.has_next is False
    assert page.has_previous is True


def test_non_positive_page_and_size_are_clamped(priced_catalog):
    page = paginate(priced_catalog, page=0, page_size=0)
    assert page.page == 1
    assert page.page_size == 1
    assert ids(page.items) == ["p30"]


def test_no_page_size_puts_everything_on_one_page(priced_catalog):
    page = paginate(priced_catalog)
    assert len(page.items) == 5
    assert page.page == 1
    assert page.page_size == 5
    assert page.total_pages == 1
    assert page.has_next is False

    empty = paginate([])
    assert empty.total_pages == 0


def test_negative_limit_means_zero():
    assert clamp_limit(-3) == 0
    assert clamp_limit(None) is None


def test_search_matches_several_fields(make_product):
    lamp = make_product("l1", "Prism Lamp", subcategory="Lighting", short_description="Warm amber glow")
    assert matches_search(lamp, "prism")
    assert matches_search(lamp, "LIGHT")
    assert matches_search(lamp, "amber")
    assert not matches_search(lamp, "walnut")
