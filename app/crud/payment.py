from typing import List
from sqlalchemy.sql import select

from app.db.store import DataStore
from app.models.payment import Payment, PaymentMethod, PaymentStatus


class CRUDPayment:
    async def create_payment(self, store: DataStore, booking_id: str, amount, payment_method: PaymentMethod) -> Payment:
        # no gateway behind this: every recorded payment is completed
        return await store.insert(Payment(
            booking_id=booking_id,
            amount=amount,
            payment_method=payment_method,
            status=PaymentStatus.COMPLETED
        ))

    async def get_payments_for_booking(self, store: DataStore, booking_id: str) -> List[Payment]:
        return await store.all(
            select(Payment)
            .where(Payment.booking_id == booking_id)
            .order_by(Payment.created_at)
        )


crud_payment = CRUDPayment()
