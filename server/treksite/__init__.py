"""Trekking operator storefront and content-management API."""
