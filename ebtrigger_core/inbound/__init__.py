from ebtrigger_core.inbound.normalizer import (
    PLACEHOLDER_MESSAGE,
    TEST_URL_MARKER,
    InboundNormalizer,
)
from ebtrigger_core.inbound.records import read_trigger_records, write_trigger_records
from ebtrigger_core.inbound.types import (
    InboundNotification,
    parse_notification,
    resolvable_url,
)

__all__ = [
    "InboundNormalizer",
    "InboundNotification",
    "PLACEHOLDER_MESSAGE",
    "TEST_URL_MARKER",
    "parse_notification",
    "read_trigger_records",
    "resolvable_url",
    "write_trigger_records",
]
