"""
Database package - Infrastructure Layer

MongoDB client wrapper used by the forecast repository and health checks.
"""

from src.infrastructure.database.mongo_database import MongoDatabase

__all__ = ["MongoDatabase"]
