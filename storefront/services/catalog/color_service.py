"""
Colour reuse-or-fork decisions for variant reconciliation.

Images belong to the `Color` row, not to the variant, so a colour row that
carries images must never end up shared between products. The decision is a
pure function over a `ColorContext` snapshot; gathering the snapshot and
executing the decision are the only steps that touch the database.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Union

from django.core.exceptions import ValidationError

from productcolors.models import Color, ProductVariant

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VariantDescriptor:
    """
    One submitted variant row.

    Attributes:
        size: Size label (free text, may be empty at this layer).
        color_name: Display name for the colour.
        color_value: HEX code or keyword; blank means the variant is colourless.
        stock: Units in stock.
        color_id: Explicit colour picked in the form (create path only).
        color_images_text: Newline-delimited image URLs, or None if absent.
    """

    size: str
    color_name: str = ""
    color_value: str = ""
    stock: int = 0
    color_id: Optional[str] = None
    color_images_text: Optional[str] = None


@dataclass(frozen=True)
class ColorCandidate:
    """An existing colour row plus how many *other* products reference it."""

    id: object
    other_products: int = 0


@dataclass(frozen=True)
class ColorContext:
    by_id: Optional[ColorCandidate] = None
    by_value: Optional[ColorCandidate] = None


@dataclass(frozen=True)
class NoColor:
    pass


@dataclass(frozen=True)
class ReuseColor:
    color_id: object


@dataclass(frozen=True)
class UpdateColor:
    """Reuse `color_id` after writing the non-None fields onto it."""

    color_id: object
    name: Optional[str] = None
    value: Optional[str] = None
    images: Optional[List[str]] = None


@dataclass(frozen=True)
class ForkColor:
    name: str
    value: str
    images: List[str] = field(default_factory=list)


ColorDecision = Union[NoColor, ReuseColor, UpdateColor, ForkColor]


def parse_color_images(text: Optional[str]) -> List[str]:
    """Split newline-delimited URLs, trimming lines and dropping blanks."""
    if not text:
        return []
    return [line.strip() for line in text.split("\n") if line.strip()]


def _display_name(descriptor: VariantDescriptor) -> str:
    return descriptor.color_name or descriptor.color_value


def _fork(descriptor: VariantDescriptor, images: List[str]) -> ForkColor:
    return ForkColor(name=_display_name(descriptor), value=descriptor.color_value, images=images)


def _reuse_by_value(descriptor: VariantDescriptor, candidate: ColorCandidate) -> ColorDecision:
    if descriptor.color_name:
        return UpdateColor(candidate.id, name=descriptor.color_name)
    return ReuseColor(candidate.id)


def resolve_color(
    descriptor: VariantDescriptor,
    context: ColorContext,
    *,
    is_new: bool,
) -> ColorDecision:
    """
    Decide which colour row a variant should point at.

    Args:
        descriptor: Submitted variant.
        context: Existing candidates and their usage by other products.
        is_new: True on the product-create path, False when editing.

    Returns:
        NoColor, ReuseColor, UpdateColor or ForkColor.
    """
    if not descriptor.color_value:
        return NoColor()

    images = parse_color_images(descriptor.color_images_text)

    if is_new and descriptor.color_id:
        existing = context.by_id
        if existing is None:
            return _fork(descriptor, images)
        if images and existing.other_products > 0:
            return _fork(descriptor, images)
        return UpdateColor(
            existing.id,
            name=_display_name(descriptor),
            value=descriptor.color_value,
            images=images,
        )

    if images:
        return _fork(descriptor, images)

    candidate = context.by_value
    if candidate is None or candidate.other_products > 0:
        return _fork(descriptor, [])
    return _reuse_by_value(descriptor, candidate)


def count_other_products(color_id, product_id) -> int:
    """Number of distinct products other than `product_id` with variants in this colour."""
    return (
        ProductVariant.objects.filter(color_id=color_id)
        .exclude(product_id=product_id)
        .values("product_id")
        .distinct()
        .count()
    )


def _find_by_value(value: str, attached_color_ids: Iterable) -> Optional[Color]:
    candidates = list(Color.objects.filter(value=value).order_by("created_at", "pk"))
    if not candidates:
        return None
    attached = set(attached_color_ids)
    for color in candidates:
        if color.pk in attached:
            return color
    return candidates[0]


def build_color_context(
    descriptor: VariantDescriptor,
    product_id,
    *,
    is_new: bool,
    attached_color_ids: Iterable = (),
) -> ColorContext:
    """
    Load the rows `resolve_color` needs for one descriptor.

    `attached_color_ids` are the colours the product referenced before its
    variants were rewritten; a same-value colour among them is preferred.
    """
    if not descriptor.color_value:
        return ColorContext()

    by_id = None
    if is_new and descriptor.color_id:
        try:
            color = Color.objects.filter(pk=descriptor.color_id).first()
        except ValidationError:
            # Не UUID: такого цвета точно нет
            color = None
        if color is not None:
            by_id = ColorCandidate(color.pk, count_other_products(color.pk, product_id))
        return ColorContext(by_id=by_id)

    by_value = None
    color = _find_by_value(descriptor.color_value, attached_color_ids)
    if color is not None:
        by_value = ColorCandidate(color.pk, count_other_products(color.pk, product_id))
    return ColorContext(by_value=by_value)


def apply_color_decision(decision: ColorDecision):
    """Execute a decision and return the colour id the variant should use."""
    if isinstance(decision, NoColor):
        return None

    if isinstance(decision, ReuseColor):
        return decision.color_id

    if isinstance(decision, UpdateColor):
        updates = {}
        if decision.name is not None:
            updates["name"] = decision.name
        if decision.value is not None:
            updates["value"] = decision.value
        if decision.images is not None:
            updates["images"] = decision.images
        if updates:
            Color.objects.filter(pk=decision.color_id).update(**updates)
        logger.debug("Reusing colour %s (updated: %s)", decision.color_id, sorted(updates))
        return decision.color_id

    color = Color.objects.create(name=decision.name, value=decision.value, images=decision.images)
    logger.debug("Forked colour %s for value %r with %d image(s)", color.pk, color.value, len(color.images))
    return color.pk
