"""
Persistence adapters.

Services depend on the CollectionStore interface (read all / write all) rather
than on the JSON files themselves.
"""
