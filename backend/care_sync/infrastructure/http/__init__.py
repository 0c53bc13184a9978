from .care_api_client import CareApiClient
from .record_gateway import HttpRecordGateway
from .owner_directory import HttpOwnerDirectory

__all__ = ["CareApiClient", "HttpRecordGateway", "HttpOwnerDirectory"]
