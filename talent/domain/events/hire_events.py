from dataclasses import dataclass
from decimal import Decimal

from infrastructure.events import DomainEvent


@dataclass
class HireRequestedEvent(DomainEvent):
    """Event: a client sent a hire request. The freelancer is notified."""

    def __init__(self, hire_id: str, freelancer_user_id: str, client_name: str, project_title: str, budget: Decimal):
        super().__init__(
            event_type="hire.requested",
            payload={
                "hire_id": hire_id,
                "freelancer_user_id": freelancer_user_id,
                "client_name": client_name,
                "project_title": project_title,
                "budget": str(budget),
            },
        )


@dataclass
class HireStatusChangedEvent(DomainEvent):
    """Event: a hire moved along. The other party is notified."""

    def __init__(self, hire_id: str, recipient_id: str, project_title: str, status: str):
        super().__init__(
            event_type="hire.status_changed",
            payload={
                "hire_id": hire_id,
                "recipient_id": recipient_id,
                "project_title": project_title,
                "status": status,
            },
        )
