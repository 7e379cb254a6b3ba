# backend/culturastock/core/database.py
from typing import Optional
from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from culturastock.models.item_model import InventoryItem
from culturastock.models.loan_model import Loan
from culturastock.models.damage_report_model import DamageReport
import logging

logger = logging.getLogger(__name__)

DOCUMENT_MODELS = [InventoryItem, Loan, DamageReport]


class Database:
    """
    Process-wide handle to the document store.

    Built once at startup, attached to ``app.state`` and closed at shutdown.
    """

    def __init__(self, connection_string: str, database_name: str):
        self.connection_string = connection_string
        self.database_name = database_name
        self.client: Optional[AsyncIOMotorClient] = None
        self.database: Optional[AsyncIOMotorDatabase] = None

    async def connect(self) -> None:
        logger.info("Connecting to MongoDB...")
        self.client = AsyncIOMotorClient(self.connection_string)
        try:
            await self.client.admin.command('ping')
            logger.info("MongoDB connection successful")

            self.database = self.client[self.database_name]
            await init_beanie(database=self.database, document_models=DOCUMENT_MODELS)
            logger.info("Beanie ODM initialized successfully")
        except Exception:
            self.close()
            raise

    async def ping(self) -> bool:
        if not self.client:
            return False
        await self.client.admin.command('ping')
        return True

    def close(self) -> None:
        if self.client:
            self.client.close()
            self.client = None
            self.database = None
            logger.info("Disconnected from MongoDB")
