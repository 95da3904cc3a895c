"""Templates for the business events the dashboard announces.

Each function only binds a module, title and message shape to an event;
pass the result to ``NotificationLedger.add``.
"""

from __future__ import annotations

from bakeops.domain.model.notification import (
    NewNotification,
    NotificationModule,
    NotificationType,
)


def order_created(order_number: str, order_id: int | str) -> NewNotification:
    return NewNotification(
        type=NotificationType.ORDER_NEW,
        title="New Order Received",
        message=f"Order #{order_number} has been placed",
        module=NotificationModule.ORDERS,
        data={"orderId": order_id, "orderNumber": order_number},
        link=f"/orders?order={order_id}",
    )


def order_status_changed(
    order_number: str, old_status: str, new_status: str, order_id: int | str
) -> NewNotification:
    return NewNotification(
        type=NotificationType.ORDER_STATUS_CHANGED,
        title="Order Status Updated",
        message=f"Order #{order_number} changed from {old_status} to {new_status}",
        module=NotificationModule.ORDERS,
        data={
            "orderId": order_id,
            "orderNumber": order_number,
            "oldStatus": old_status,
            "newStatus": new_status,
        },
        link=f"/orders?order={order_id}",
    )


def payment_received(order_number: str, amount: float, order_id: int | str) -> NewNotification:
    return NewNotification(
        type=NotificationType.PAYMENT_RECEIVED,
        title="Payment Received",
        message=f"Payment of ₹{amount:.2f} received for order #{order_number}",
        module=NotificationModule.PAYMENTS,
        data={"orderId": order_id, "orderNumber": order_number, "amount": amount},
        link=f"/payments?order={order_id}",
    )


def delivery_assigned(
    order_number: str, delivery_boy_name: str, order_id: int | str
) -> NewNotification:
    return NewNotification(
        type=NotificationType.DELIVERY_ASSIGNED,
        title="Delivery Assigned",
        message=f"Order #{order_number} assigned to {delivery_boy_name}",
        module=NotificationModule.DELIVERY,
        data={
            "orderId": order_id,
            "orderNumber": order_number,
            "deliveryBoyName": delivery_boy_name,
        },
        link=f"/delivery?order={order_id}",
    )


def delivery_status_changed(order_number: str, status: str, order_id: int | str) -> NewNotification:
    return NewNotification(
        type=NotificationType.DELIVERY_STATUS_CHANGED,
        title="Delivery Status Updated",
        message=f"Order #{order_number} delivery status: {status}",
        module=NotificationModule.DELIVERY,
        data={"orderId": order_id, "orderNumber": order_number, "status": status},
        link=f"/delivery?order={order_id}",
    )


def low_stock(product_name: str, current_stock: int, product_id: int | str) -> NewNotification:
    return NewNotification(
        type=NotificationType.LOW_STOCK,
        title="Low Stock Alert",
        message=f"{product_name} is running low ({current_stock} remaining)",
        module=NotificationModule.PRODUCTS,
        data={
            "productId": product_id,
            "productName": product_name,
            "currentStock": current_stock,
        },
        link=f"/products?product={product_id}",
    )
