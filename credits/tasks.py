"""
Credits Celery Tasks

Periodic sweep that ends boost campaigns past their expiry.
"""

import logging

from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=3, queue="marketplace_tasks")
def expire_boosts_task(self):
    """
    Deactivate expired boosts and reset their listings.

    Returns:
        dict: {"success": bool, "expired": int}
    """
    from infrastructure.container import container

    try:
        result = container.boost_service().expire_boosts()
    except Exception as e:
        logger.error(f"Error in boost expiry task: {e}")
        try:
            raise self.retry(countdown=60 * (2 ** self.request.retries))
        except self.MaxRetriesExceededError:
            return {"success": False, "expired": 0, "error": f"Max retries exceeded: {e}"}

    return {"success": result.ok, "expired": result.value or 0}
