# app/services/notification_service.py
from decimal import Decimal

from kombu.exceptions import OperationalError

from app.celery_worker import celery_app
from app.utils.logging import get_logger
from app.utils.retry import broker_retry

logger = get_logger(__name__)


class NotificationService:
    """
    Powiadomienia o zamowieniach przez Celery.
    Wolane dopiero po commit, blad brokera nie cofa zamowienia.
    """

    def send_order_notification(self, user_id: int, order_id: int, total_amount: Decimal) -> bool:
        try:
            self._enqueue(user_id, order_id, str(total_amount))
        except OperationalError as e:
            logger.error(f"Could not queue notification for order {order_id}: {e}")
            return False
        return True

    @broker_retry()
    def _enqueue(self, user_id: int, order_id: int, total_amount: str):
        send_order_notification_task.delay(user_id, order_id, total_amount)


@celery_app.task(name="app.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: int, order_id: int, total_amount: str):
    """
    Celery task - email do klienta jest zewnetrzna usluga, tutaj tylko logujemy.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: order {order_id} placed, total {total_amount}")

    return {"user_id": user_id, "order_id": order_id, "status": "sent"}
