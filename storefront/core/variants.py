# storefront/core/variants.py

"""Product family grouping and variant resolution.

A family is every catalog row sharing the same display name. There is no
stored family id: the name is the only key, so two unrelated products with the
same name will be merged.
"""

import re
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from storefront.schemas.product import Product

# Detail-page option groups, in the order they appear in a URL
OPTION_KEYS = ("color", "size", "capacity", "scent")


def group_by_name(products: Iterable[Product]) -> Dict[str, List[Product]]:
    """Group rows by name. Dict order is the first-seen order of each name."""
    groups: Dict[str, List[Product]] = {}
    for product in products:
        groups.setdefault(product.name, []).append(product)
    return groups


def _color_union(group: Sequence[Product]) -> List[str]:
    seen: Dict[str, None] = {}
    for product in group:
        if product.color:
            seen.setdefault(product.color, None)
        for color in product.colors or []:
            seen.setdefault(color, None)
    return list(seen)


def deduplicate_products(products: Iterable[Product]) -> List[Product]:
    """One representative per family: the first row, with the family's colors merged in."""
    representatives = []
    for group in group_by_name(products).values():
        base = group[0]
        colors = _color_union(group)
        representatives.append(
            base.model_copy(
                update={
                    "colors": colors if colors else base.colors,
                    "variants": max(0, len(group) - 1),
                }
            )
        )
    return representatives


def find_product(products: Iterable[Product], product_id: str) -> Optional[Product]:
    return next((p for p in products if p.id == product_id), None)


def family_variants(products: Sequence[Product], product_id: str) -> List[Product]:
    """Every concrete row in the family of product_id, in catalog order."""
    product = find_product(products, product_id)
    if product is None:
        return []
    return [p for p in products if p.name == product.name]


def resolve_base_id(products: Sequence[Product], product_id: str) -> Optional[str]:
    """Id of the first row in product_id's family, or None if product_id is unknown."""
    variants = family_variants(products, product_id)
    if not variants:
        return None
    return variants[0].id


# --- Detail-page variant selection ---

def normalize_option_value(value: str) -> str:
    value = re.sub(r"[\s_]+", "-", value.strip().lower())
    value = re.sub(r"-+", "-", value)
    return value.strip("-")


def _option_list(variant: Product, key: str) -> List[str]:
    if key == "size":
        return variant.sizes or []
    if key == "capacity":
        return variant.capacities or []
    if key == "scent":
        return variant.scents or []
    return []


def _contains(options: Iterable[str], value: str) -> bool:
    wanted = normalize_option_value(value)
    return any(normalize_option_value(option) == wanted for option in options)


def variant_supports_option(variant: Product, key: str, value: str) -> bool:
    if key == "color":
        own = [variant.color] if variant.color else []
        return _contains(own + (variant.colors or []), value)
    return _contains(_option_list(variant, key), value)


def variant_has_exact_option(variant: Product, key: str, value: str) -> bool:
    # Color must be the row's own color; the family union does not count
    if key == "color":
        return variant.color is not None and _contains([variant.color], value)
    return _contains(_option_list(variant, key), value)


def variant_option_value(variant: Product, key: str) -> Optional[str]:
    if key == "color":
        return variant.color
    options = _option_list(variant, key)
    return options[0] if options else None


def variant_selection(variant: Product) -> Dict[str, str]:
    """The option values that identify this row, for use as URL query parameters."""
    selection = {}
    for key in OPTION_KEYS:
        value = variant_option_value(variant, key)
        if value:
            selection[key] = value
    return selection


def _prefer_in_stock(candidates: List[Product]) -> Optional[Product]:
    if not candidates:
        return None
    return next((v for v in candidates if v.in_stock), candidates[0])


def find_exact_matching_variant(variants: Sequence[Product], selected: Mapping[str, str]) -> Optional[Product]:
    if not selected:
        return None
    matches = [
        v for v in variants
        if all(variant_has_exact_option(v, key, value) for key, value in selected.items())
    ]
    return _prefer_in_stock(matches)


def find_best_matching_variant(variants: Sequence[Product], selected: Mapping[str, str]) -> Optional[Product]:
    matches = [
        v for v in variants
        if all(variant_supports_option(v, key, value) for key, value in selected.items())
    ]
    found = _prefer_in_stock(matches)
    if found is not None:
        return found

    # Nothing supports every option: take the row matching the most of them
    best, best_count = (variants[0] if variants else None), 0
    for variant in variants:
        count = sum(1 for key, value in selected.items() if variant_supports_option(variant, key, value))
        if count > best_count:
            best, best_count = variant, count
    return best


def resolve_current_variant(variants: Sequence[Product], selected: Mapping[str, str], base: Product) -> Product:
    """Exact match first, then the best partial match, then the base row."""
    exact = find_exact_matching_variant(variants, selected)
    if exact is not None:
        return exact
    best = find_best_matching_variant(variants, selected)
    return best if best is not None else base
