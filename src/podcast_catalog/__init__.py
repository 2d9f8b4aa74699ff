"""Podcast Catalog - GraphQL backend for podcasts and their episodes.

Exposes create/read/update/delete operations for podcasts and episodes
over a single GraphQL endpoint backed by a relational database.
"""

__version__ = "0.1.0"
