from .json_record_repository import JsonFileRecordRepository
from .sqlalchemy_record_repository import SqlAlchemyRecordRepository

__all__ = ["JsonFileRecordRepository", "SqlAlchemyRecordRepository"]
