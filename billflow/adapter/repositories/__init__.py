from .bill_repository import SqlAlchemyBillRepository

__all__ = [
    "SqlAlchemyBillRepository",
]
