"""
Product create/update/delete: slug assignment, scalar fields, variants, order.
"""
from __future__ import annotations

import logging
import re
import time
from typing import Any, Dict, Iterable, List, Mapping

from django.db import transaction

from storefront.models import Product

from .color_service import VariantDescriptor
from .ordering import next_display_order
from .variant_service import create_variants, replace_variants

logger = logging.getLogger(__name__)

SCALAR_FIELDS = (
    "name",
    "description",
    "price",
    "compare_price",
    "category",
    "images",
    "featured",
)

_NON_SLUG_CHARS = re.compile(r"[^\w\s-]", re.ASCII)
_WHITESPACE = re.compile(r"\s+")
_DASH_RUNS = re.compile(r"-{2,}")


class EmptyUpdateError(ValueError):
    """Update request carried neither product fields nor variants."""


def slugify_name(name: str) -> str:
    """
    Turn a product name into a URL slug.

    Falls back to ``product-<epoch millis>`` when nothing usable is left
    (e.g. a name written entirely in Cyrillic).
    """
    slug = _NON_SLUG_CHARS.sub("", name.lower())
    slug = _WHITESPACE.sub("-", slug)
    slug = _DASH_RUNS.sub("-", slug).strip("-")
    if not slug:
        slug = f"product-{int(time.time() * 1000)}"
    return slug


def unique_slug(base: str) -> str:
    """Return `base`, or the first free ``base-1``, ``base-2``, …"""
    slug = base
    counter = 1
    while Product.objects.filter(slug=slug).exists():
        slug = f"{base}-{counter}"
        counter += 1
    return slug


def descriptors_from_payload(rows: Iterable[Mapping[str, Any]]) -> List[VariantDescriptor]:
    """Build descriptors from validated variant rows (snake_case keys)."""
    return [
        VariantDescriptor(
            size=row["size"],
            color_name=row.get("color_name") or "",
            color_value=row.get("color_value") or "",
            stock=row["stock"],
            color_id=row.get("color_id") or None,
            color_images_text=row.get("color_images_text"),
        )
        for row in rows
    ]


@transaction.atomic
def create_product(data: Mapping[str, Any]) -> Product:
    """
    Create a product on top of the list together with its variants.

    Args:
        data: Validated payload; `variants` is an optional list of variant rows.
    """
    slug = unique_slug(slugify_name(data["name"]))
    fields: Dict[str, Any] = {key: data[key] for key in SCALAR_FIELDS if key in data}
    fields.setdefault("images", [])
    fields.setdefault("featured", False)

    product = Product.objects.create(slug=slug, display_order=next_display_order(), **fields)
    logger.info("Created product %s (%s) at display_order %s", product.pk, product.slug, product.display_order)

    variants = data.get("variants") or []
    if variants:
        create_variants(product, descriptors_from_payload(variants))
    return product


@transaction.atomic
def update_product(product: Product, data: Mapping[str, Any]) -> Product:
    """
    Patch only the fields present in `data`.

    Variants are rewritten if and only if the `variants` key is present; an
    empty list removes them all.

    Raises:
        EmptyUpdateError: nothing to update.
    """
    changed = [key for key in SCALAR_FIELDS if key in data]
    if not changed and "variants" not in data:
        raise EmptyUpdateError("No data")

    if changed:
        for key in changed:
            setattr(product, key, data[key])
        product.save(update_fields=changed + ["updated_at"])
        logger.info("Updated product %s fields: %s", product.pk, ", ".join(changed))

    if "variants" in data:
        replace_variants(product, descriptors_from_payload(data["variants"]))
    return product


def delete_product(product: Product) -> None:
    """Delete a product; its variants go with it, colours stay."""
    product_id = product.pk
    product.delete()
    logger.info("Deleted product %s", product_id)
