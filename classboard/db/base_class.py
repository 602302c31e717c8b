# /classboard-backend/classboard/db/base_class.py

from sqlalchemy.orm import declarative_base, declared_attr


class CustomBase:
    # Tables are named after their class, pluralised (Student -> "students").
    # Models override `__tablename__` where the automatic name reads badly.
    @declared_attr
    def __tablename__(cls) -> str:
        return cls.__name__.lower() + "s"


Base = declarative_base(cls=CustomBase)
