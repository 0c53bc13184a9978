from .common import FacilityDate, RecordFields, RecordResponse, WireModel
from .vital_sign import VitalSignFields, VitalSignResponse
from .bathing_record import BathingRecordFields, BathingRecordResponse
from .round_record import RoundRecordFields, RoundRecordResponse
from .staff import StaffFields, StaffResponse
from .resident import ResidentResponse
from .grid import (
    GridCreateRequest,
    GridEditRequest,
    GridRowsResponse,
    GridScopeParams,
    NotificationSchema,
    OutcomeResponse,
)

__all__ = [
    "FacilityDate",
    "RecordFields",
    "RecordResponse",
    "WireModel",
    "VitalSignFields",
    "VitalSignResponse",
    "BathingRecordFields",
    "BathingRecordResponse",
    "RoundRecordFields",
    "RoundRecordResponse",
    "StaffFields",
    "StaffResponse",
    "ResidentResponse",
    "GridCreateRequest",
    "GridEditRequest",
    "GridRowsResponse",
    "GridScopeParams",
    "NotificationSchema",
    "OutcomeResponse",
]
