from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All ORM models in the application must inherit from this base class
    in order to:
    - Be registered in the SQLAlchemy metadata
    - Be automatically created when initializing the database
    """
