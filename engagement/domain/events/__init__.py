from .review_events import ReviewSubmittedEvent

__all__ = ["ReviewSubmittedEvent"]
