"""Order history: read access to placed orders and their items."""

from ordering.order.order import Order, OrderItem
from shared.store import EntityStore


class OrderHistory:
    def __init__(self, store: EntityStore):
        self.store = store

    def orders_for(self, user_id: int) -> list[Order]:
        return list(self.store.list(Order, lambda order: order.user_id == user_id))

    def get(self, order_id: int) -> Order | None:
        return self.store.get(Order, order_id)

    def items_for(self, order_id: int) -> list[OrderItem]:
        return list(self.store.list(OrderItem, lambda item: item.order_id == order_id))
