"""Backoffice API: CRUD over flat JSON collections (users, suppliers, stores, products, orders, campaigns)."""
