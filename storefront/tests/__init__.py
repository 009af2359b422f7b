"""
Unit tests for the storefront app.

Test structure:
- test_color_resolution.py: Pure colour reuse-or-fork decisions
- test_variant_service.py: Variant rewrite against the database
- test_ordering.py: Display order (next value, move up/down, resequence)
- test_products.py: Slugs and product create/update services
- test_products_api.py: Product REST endpoints
- test_apps.py: One-time schema setup
"""
