"""Database query utility functions."""
from typing import Optional, TypeVar, Type, Any
from sqlalchemy.orm import Session

T = TypeVar("T")


def get_by_field(
    db: Session,
    model: Type[T],
    field_name: str,
    field_value: Any,
    **filters: Any,
) -> Optional[T]:
    """
    Get a model instance by a specific field.
    
    Args:
        db: Database session
        model: SQLAlchemy model class
        field_name: Name of the field to filter by
        field_value: Value to filter by
        filters: Additional equality filters (e.g. status="published")
        
    Returns:
        Model instance or None
    """
    query = db.query(model).filter(getattr(model, field_name) == field_value)
    for name, value in filters.items():
        query = query.filter(getattr(model, name) == value)
    return query.first()
