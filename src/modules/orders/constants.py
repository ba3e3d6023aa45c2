"""Order domain constants.

Defines the status taxonomy, the transition table of the parcel pipeline
(China warehouse -> Kazakhstan branch -> client) and the presentation
lookups the back-office UI renders for each status.
"""

from django.db import models


class OrderStatus(models.TextChoices):
    CREATED = "created", "Создан"
    ARRIVED_CN = "arrived_cn", "Прибыл в Китай"
    PACKED = "packed", "Упакован"
    SENT_TO_KZ = "sent_to_kz", "Отправлен в Казахстан"
    IN_TRANSIT = "in_transit", "В пути"
    ARRIVED_BRANCH = "arrived_branch", "Прибыл в филиал"
    READY_FOR_PICKUP = "ready_for_pickup", "Готов к выдаче"
    ISSUED = "issued", "Выдан клиенту"
    PROBLEM = "problem", "Проблема"
    CANCELLED = "cancelled", "Отменён"


VALID_TRANSITIONS: dict[str, frozenset[str]] = {
    OrderStatus.CREATED: frozenset({OrderStatus.ARRIVED_CN}),
    OrderStatus.ARRIVED_CN: frozenset({OrderStatus.PACKED}),
    OrderStatus.PACKED: frozenset({OrderStatus.SENT_TO_KZ}),
    OrderStatus.SENT_TO_KZ: frozenset({OrderStatus.IN_TRANSIT}),
    OrderStatus.IN_TRANSIT: frozenset({OrderStatus.ARRIVED_BRANCH}),
    OrderStatus.ARRIVED_BRANCH: frozenset({OrderStatus.READY_FOR_PICKUP}),
    OrderStatus.READY_FOR_PICKUP: frozenset({OrderStatus.ISSUED}),
    OrderStatus.ISSUED: frozenset(),
    # Only an admin override can move an order out of PROBLEM.
    OrderStatus.PROBLEM: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

TERMINAL_STATES: frozenset[str] = frozenset(
    {OrderStatus.ISSUED, OrderStatus.PROBLEM, OrderStatus.CANCELLED}
)

# Targets each non-admin role may drive (after the transition table allows them).
CHINA_WORKER_TARGETS: frozenset[str] = frozenset(
    {OrderStatus.ARRIVED_CN, OrderStatus.PACKED, OrderStatus.SENT_TO_KZ}
)
BRANCH_WORKER_TARGETS: frozenset[str] = frozenset(
    {OrderStatus.ARRIVED_BRANCH, OrderStatus.READY_FOR_PICKUP, OrderStatus.ISSUED}
)
BRANCH_SCOPED_TARGETS: frozenset[str] = frozenset(
    {OrderStatus.READY_FOR_PICKUP, OrderStatus.ISSUED}
)

TRACKING_NUMBER_MIN_LENGTH = 6
TRACKING_NUMBER_MAX_LENGTH = 60

STATUS_COLORS: dict[str, str] = {
    OrderStatus.CREATED: "bg-gray-100 text-gray-800",
    OrderStatus.ARRIVED_CN: "bg-blue-100 text-blue-800",
    OrderStatus.PACKED: "bg-indigo-100 text-indigo-800",
    OrderStatus.SENT_TO_KZ: "bg-purple-100 text-purple-800",
    OrderStatus.IN_TRANSIT: "bg-yellow-100 text-yellow-800",
    OrderStatus.ARRIVED_BRANCH: "bg-orange-100 text-orange-800",
    OrderStatus.READY_FOR_PICKUP: "bg-green-100 text-green-800",
    OrderStatus.ISSUED: "bg-emerald-100 text-emerald-800",
    OrderStatus.PROBLEM: "bg-red-100 text-red-800",
    OrderStatus.CANCELLED: "bg-gray-100 text-gray-800",
}
DEFAULT_STATUS_COLOR = "bg-gray-100 text-gray-800"

ACTION_LABELS: dict[str, str] = {
    OrderStatus.CREATED: "Создать",
    OrderStatus.ARRIVED_CN: "Прибыл в Китай",
    OrderStatus.PACKED: "Упакован",
    OrderStatus.SENT_TO_KZ: "Отправлен в Казахстан",
    OrderStatus.IN_TRANSIT: "В пути",
    OrderStatus.ARRIVED_BRANCH: "Прибыл в филиал",
    OrderStatus.READY_FOR_PICKUP: "Готов к выдаче",
    OrderStatus.ISSUED: "Выдать клиенту",
    OrderStatus.PROBLEM: "Отметить проблему",
    OrderStatus.CANCELLED: "Отменить",
}

ORDER_STATUS_UPDATE_ACTION = "order_status_update"
ORDER_CREATED_ACTION = "order_created"
