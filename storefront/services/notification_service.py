# storefront/services/notification_service.py
from storefront.celery_worker import celery_app
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Powiadomienia o zlozonych zamowieniach, przez Celery.
    """

    @staticmethod
    def send_order_notification(order_id: int, customer_email: str, total_amount: str):
        send_order_notification_task.delay(order_id, customer_email, total_amount)


@celery_app.task(name="storefront.services.notification_service.send_order_notification_task")
def send_order_notification_task(order_id: int, customer_email: str, total_amount: str):
    """
    W prawdziwym systemie wyslalby email z potwierdzeniem. Teraz tylko loguje.
    """
    logger.info(f"[NOTIFICATION] {customer_email}: order {order_id} placed, total {total_amount}")
    return {"order_id": order_id, "customer_email": customer_email, "status": "sent"}
