"""Shared FastAPI dependencies."""
from fastapi import Depends
from sqlalchemy.orm import Session

from gameserve.config import Settings, get_settings
from gameserve.database import get_db
from gameserve.services.delivery import DeliveryService
from gameserve.services.storage import StorageService


def get_storage(settings: Settings = Depends(get_settings)) -> StorageService:
    """Raises ConfigurationError when storage credentials are missing."""
    return StorageService(settings)


def get_delivery_service(
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
) -> DeliveryService:
    return DeliveryService(settings, db, storage)
