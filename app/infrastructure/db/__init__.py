"""
Data store infrastructure for the Time Manager API.
"""

from .database import SupabaseClientFactory, get_client_factory, get_service_client, check_database

__all__ = [
    "SupabaseClientFactory",
    "get_client_factory",
    "get_service_client",
    "check_database",
]
