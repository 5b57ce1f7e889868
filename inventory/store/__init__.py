"""
Product Inventory API: Store Package
====================================

What:  Key-value store backends behind the ProductStore interface, and the
       factory that picks one from settings.

Store Inventory:
    - ProductStore (abstract): get / put / update / delete / scan contract
    - DynamoDBProductStore:    boto3 Table, the production store
    - SqlProductStore:         async SQLAlchemy table, for local development
"""

import boto3

from inventory.config import Settings
from inventory.database import create_engine
from inventory.store.base import (
    PRIMARY_KEY,
    ProductStore,
    ScanPage,
    ScanRequest,
    StoreResult,
    guarded,
)
from inventory.store.dynamodb import DynamoDBProductStore
from inventory.store.sql import SqlProductStore

__all__ = [
    "PRIMARY_KEY",
    "ProductStore",
    "ScanPage",
    "ScanRequest",
    "StoreResult",
    "guarded",
    "DynamoDBProductStore",
    "SqlProductStore",
    "create_store",
]


def create_store(config: Settings) -> ProductStore:
    """
    Build the ProductStore selected by STORE_BACKEND.

    Creating the boto3 resource or the SQLAlchemy engine opens no
    connection; the first store call does.
    """
    if config.store_backend == "sql":
        engine = create_engine(
            config.database_url,
            pool_pre_ping=config.db_pool_pre_ping,
            echo=config.log_level == "DEBUG",
        )
        return SqlProductStore(engine, table_name=config.table_name)

    resource = boto3.resource(
        "dynamodb",
        region_name=config.aws_region,
        endpoint_url=config.dynamodb_endpoint_url,
    )
    return DynamoDBProductStore(resource, config.table_name)
