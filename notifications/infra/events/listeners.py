"""
Domain event -> notification listeners.

Every handler receives the bus envelope ``{"event_type", "occurred_at",
"payload"}`` and creates one notification for the interested user. Handler
errors are logged by the bus and never reach the publisher.
"""

import logging

from infrastructure.events import get_event_bus

logger = logging.getLogger(__name__)

STATUS_LABELS = {
    "in_progress": "in progress",
    "pending_payment": "awaiting payment",
}


def _label(status: str) -> str:
    return STATUS_LABELS.get(status, status)


def _notify(user_id, type, title, message, action_url="", metadata=None):
    from infrastructure.container import container

    if not user_id:
        logger.warning(f"Notification '{title}' dropped: no recipient")
        return None
    result = container.notification_service().notify(
        user_id, type, title, message, action_url=action_url, metadata=metadata
    )
    if not result.ok:
        logger.error(f"Notification '{title}' for {user_id} not created: {result.error_detail}")
    return result


def handle_order_placed(envelope):
    payload = envelope["payload"]
    _notify(
        payload["seller_id"],
        "order",
        "New order received",
        f"Your product \"{payload['product_title']}\" was ordered (${payload['total_price']}).",
        action_url="/orders?role=seller",
        metadata={"order_id": payload["order_id"]},
    )


def handle_order_status_changed(envelope):
    payload = envelope["payload"]
    message = f"Your order is now {_label(payload['new_status'])}."
    if payload.get("tracking_number"):
        message += f" Tracking number: {payload['tracking_number']}."
    _notify(
        payload["buyer_id"],
        "order",
        "Order update",
        message,
        action_url="/orders",
        metadata={"order_id": payload["order_id"], "status": payload["new_status"]},
    )


def handle_job_application_submitted(envelope):
    payload = envelope["payload"]
    _notify(
        payload["employer_id"],
        "job_application",
        "New job application",
        f"{payload['applicant_name']} applied to \"{payload['job_title']}\".",
        action_url="/my-jobs",
        metadata={"job_id": payload["job_id"], "application_id": payload["application_id"]},
    )


def handle_job_application_status_changed(envelope):
    payload = envelope["payload"]
    _notify(
        payload["applicant_id"],
        "job_application",
        "Application update",
        f"Your application for \"{payload['job_title']}\" is now {_label(payload['status'])}.",
        action_url="/my-applications",
        metadata={"job_id": payload["job_id"], "application_id": payload["application_id"]},
    )


def handle_registration_created(envelope):
    payload = envelope["payload"]
    _notify(
        payload["organizer_id"],
        "system",
        "New event registration",
        f"{payload['attendee_name']} registered for \"{payload['event_title']}\".",
        action_url="/my-events",
        metadata={"event_id": payload["event_id"], "registration_id": payload["registration_id"]},
    )


def handle_event_application_submitted(envelope):
    payload = envelope["payload"]
    _notify(
        payload["organizer_id"],
        "system",
        "New artiste application",
        f"{payload['artiste_name']} applied as {payload['role_applied']} for \"{payload['event_title']}\".",
        action_url="/my-events",
        metadata={"event_id": payload["event_id"], "application_id": payload["application_id"]},
    )


def handle_event_application_status_changed(envelope):
    payload = envelope["payload"]
    _notify(
        payload["artiste_id"],
        "system",
        "Event application update",
        f"Your application for \"{payload['event_title']}\" is now {_label(payload['status'])}.",
        action_url=f"/events#{payload['event_id']}",
        metadata={"event_id": payload["event_id"], "application_id": payload["application_id"]},
    )


def handle_message_sent(envelope):
    payload = envelope["payload"]
    _notify(
        payload["receiver_id"],
        "message",
        f"New message from {payload['sender_name']}",
        payload["preview"],
        action_url=f"/messages?user={payload['sender_id']}",
        metadata={"message_id": payload["message_id"], "sender_id": payload["sender_id"]},
    )


def handle_hire_requested(envelope):
    payload = envelope["payload"]
    _notify(
        payload["freelancer_user_id"],
        "job_application",
        "New hire request",
        f"{payload['client_name']} wants to hire you for \"{payload['project_title']}\".",
        action_url="/hires",
        metadata={"hire_id": payload["hire_id"]},
    )


def handle_hire_status_changed(envelope):
    payload = envelope["payload"]
    _notify(
        payload["recipient_id"],
        "job_application",
        "Hire update",
        f"\"{payload['project_title']}\" is now {_label(payload['status'])}.",
        action_url="/hires",
        metadata={"hire_id": payload["hire_id"], "status": payload["status"]},
    )


def handle_review_submitted(envelope):
    payload = envelope["payload"]
    _notify(
        payload["owner_id"],
        "review",
        "New review",
        f"{payload['reviewer_name']} rated \"{payload['entity_title']}\" {payload['rating']}/5.",
        metadata={"entity_type": payload["entity_type"], "entity_id": payload["entity_id"]},
    )


def handle_boost_purchased(envelope):
    payload = envelope["payload"]
    _notify(
        payload["user_id"],
        "boost",
        "Boost activated",
        f"\"{payload['entity_title']}\" is boosted with the {payload['plan']} plan.",
        metadata={
            "boost_id": payload["boost_id"],
            "entity_type": payload["entity_type"],
            "entity_id": payload["entity_id"],
            "expires_at": payload["expires_at"],
        },
    )


LISTENERS = {
    "order.placed": handle_order_placed,
    "order.status_changed": handle_order_status_changed,
    "job.application_submitted": handle_job_application_submitted,
    "job.application_status_changed": handle_job_application_status_changed,
    "event.registration_created": handle_registration_created,
    "event.application_submitted": handle_event_application_submitted,
    "event.application_status_changed": handle_event_application_status_changed,
    "message.sent": handle_message_sent,
    "hire.requested": handle_hire_requested,
    "hire.status_changed": handle_hire_status_changed,
    "review.submitted": handle_review_submitted,
    "boost.purchased": handle_boost_purchased,
}


def register_notification_listeners(event_bus=None):
    """Subscribe every notification handler. Safe to call more than once."""
    event_bus = event_bus or get_event_bus()
    for event_type, handler in LISTENERS.items():
        event_bus.subscribe(event_type, handler)
    logger.info("Notification event listeners registered")
