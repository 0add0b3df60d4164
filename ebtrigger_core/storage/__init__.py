from ebtrigger_core.storage.paths import join_uri, records_uri, state_uri

__all__ = ["join_uri", "records_uri", "state_uri"]
