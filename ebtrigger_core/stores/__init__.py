from ebtrigger_core.stores.interfaces import StateStore
from ebtrigger_core.stores.json_store import JsonStateStore
from ebtrigger_core.stores.memory_store import MemoryStateStore

__all__ = ["JsonStateStore", "MemoryStateStore", "StateStore"]
