from .record_gateway import RecordGateway
from .owner_directory import OwnerDirectory
from .notifier import Notifier

__all__ = [
    "RecordGateway",
    "OwnerDirectory",
    "Notifier",
]
