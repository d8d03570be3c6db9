from .delete_record import DeleteRecordUseCase
from .list_records import GetRecordUseCase, ListRecordsUseCase
from .submit_record import SubmitRecordUseCase
from .update_record import UpdateRecordUseCase

__all__ = [
    "DeleteRecordUseCase",
    "GetRecordUseCase",
    "ListRecordsUseCase",
    "SubmitRecordUseCase",
    "UpdateRecordUseCase",
]
