"""
Shared base for the crediário tables.
All models import Base from here so they share one registry and metadata.
"""
from sqlalchemy import MetaData
from sqlalchemy.orm import registry

# Deterministic constraint names for migrations
metadata = MetaData(naming_convention={
    "pk": "pk_%(table_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ix": "ix_%(table_name)s_%(column_0_name)s",
})

mapper_registry = registry(metadata=metadata)
Base = mapper_registry.generate_base()
