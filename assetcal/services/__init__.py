"""Services used by the HTTP and command line interfaces."""

from assetcal.services.calendar_events import CalendarEventService
from assetcal.services.notifications import NotificationService

__all__ = ["CalendarEventService", "NotificationService"]
