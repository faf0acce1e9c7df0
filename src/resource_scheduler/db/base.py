from sqlalchemy.orm import DeclarativeBase, declared_attr


class Base(DeclarativeBase):
    """Declarative base naming each table after its model class."""

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return cls.__name__.lower()
