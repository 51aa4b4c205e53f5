"""Flet storefront application: reactive stores, controllers and UI shell."""
