from .placeholder_generator import PlaceholderGenerator
from .record_store import RecordCollection, RecordStore
from .projection_service import ProjectionService, facility_today
from .mutation_executor import OptimisticMutationExecutor
from .record_query_service import RecordQueryService

__all__ = [
    "PlaceholderGenerator",
    "RecordCollection",
    "RecordStore",
    "ProjectionService",
    "facility_today",
    "OptimisticMutationExecutor",
    "RecordQueryService",
]
