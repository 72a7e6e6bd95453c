"""
Data-access layer for the multi-tenant workspace product.

Each domain entity (companies, CRM, finance, marketing, momentum boards,
people and users) is persisted through a repository built on
:class:`tenantdb.repositories.base.BaseRepository`.
"""

__version__ = "0.1.0"
