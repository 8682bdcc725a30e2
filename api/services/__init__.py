"""
Use cases per entity (users, suppliers, stores, products, orders, campaigns).

Every service builds on CrudService and receives its CollectionStore at
construction time. Routers call these services instead of touching the JSON
files directly.
"""
