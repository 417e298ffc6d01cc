from .executor import ActionExecutor, ExecutionReport, execution_order
from .store import (
    Bounds,
    InMemoryInventoryStore,
    InventoryStore,
    ItemRecord,
    ItemSpec,
    LocationRecord,
    LocationSpec,
)

__all__ = [
    "ActionExecutor",
    "ExecutionReport",
    "execution_order",
    "Bounds",
    "InMemoryInventoryStore",
    "InventoryStore",
    "ItemRecord",
    "ItemSpec",
    "LocationRecord",
    "LocationSpec",
]
