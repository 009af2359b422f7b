"""
Catalog write-side services: colour reconciliation, variants, ordering, products.
"""

from .color_service import (
    ColorContext,
    ColorCandidate,
    ForkColor,
    NoColor,
    ReuseColor,
    UpdateColor,
    VariantDescriptor,
    parse_color_images,
    resolve_color,
)
from .ordering import (
    MoveDirection,
    move_product,
    next_display_order,
    resequence_display_order,
)
from .products import (
    EmptyUpdateError,
    create_product,
    delete_product,
    slugify_name,
    unique_slug,
    update_product,
)
from .variant_service import create_variants, replace_variants

__all__ = [
    "ColorContext",
    "ColorCandidate",
    "ForkColor",
    "NoColor",
    "ReuseColor",
    "UpdateColor",
    "VariantDescriptor",
    "parse_color_images",
    "resolve_color",
    "MoveDirection",
    "move_product",
    "next_display_order",
    "resequence_display_order",
    "EmptyUpdateError",
    "create_product",
    "delete_product",
    "slugify_name",
    "unique_slug",
    "update_product",
    "create_variants",
    "replace_variants",
]
