from ebtrigger_core.gateway.eventbrite import DEFAULT_API_URL, EventbriteGateway
from ebtrigger_core.gateway.interfaces import ApiGateway

__all__ = ["ApiGateway", "DEFAULT_API_URL", "EventbriteGateway"]
