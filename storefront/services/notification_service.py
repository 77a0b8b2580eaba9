# storefront/services/notification_service.py
from decimal import Decimal

from storefront.celery_worker import celery_app
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Notifications about placed orders.
    Sent asynchronously through Celery.
    """

    @staticmethod
    def send_order_notification(username: str, total: Decimal, address_id: str):
        send_order_notification_task.delay(username, str(total), address_id)


@celery_app.task(name="storefront.services.notification_service.send_order_notification_task")
def send_order_notification_task(username: str, total: str, address_id: str):
    """
    Celery task - only logs for now, the backend sends the real receipt.
    """
    logger.info(f"[NOTIFICATION] {username}: order of {total} placed, shipping to {address_id}")

    return {"username": username, "total": total, "address_id": address_id, "status": "sent"}
