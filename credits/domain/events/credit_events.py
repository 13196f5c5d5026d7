from dataclasses import dataclass

from infrastructure.events import DomainEvent


@dataclass
class CreditsPurchasedEvent(DomainEvent):
    def __init__(self, user_id: str, credits: int, balance: int, payment_intent_id: str):
        super().__init__(
            event_type="credits.purchased",
            payload={
                "user_id": user_id,
                "credits": credits,
                "balance": balance,
                "payment_intent_id": payment_intent_id,
            },
        )


@dataclass
class BoostPurchasedEvent(DomainEvent):
    """Event: a listing was boosted. The owner gets a confirmation notification."""

    def __init__(self, boost_id: str, user_id: str, entity_type: str, entity_id: str, entity_title: str,
                 plan: str, expires_at: str):
        super().__init__(
            event_type="boost.purchased",
            payload={
                "boost_id": boost_id,
                "user_id": user_id,
                "entity_type": entity_type,
                "entity_id": entity_id,
                "entity_title": entity_title,
                "plan": plan,
                "expires_at": expires_at,
            },
        )
