from .credit_events import BoostPurchasedEvent, CreditsPurchasedEvent

__all__ = ["BoostPurchasedEvent", "CreditsPurchasedEvent"]
