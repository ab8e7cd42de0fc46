"""Purchase configuration model shared by the importer, exporter and builder.

PLEXPURCHASES CONFIGURATION - WIRE FORMAT
=========================================

Each configuration is one YAML mapping. The host plugin reads one file per
configuration from ``assets/purchases/<identifier>.yml``.

  productId                (Product)       lowercase a-z, 0-9, "_" and "-"
  productName              (Product)
  productDescription       (Product)
  repeatablePurchase       (Product)       bool
  subscriptionId           (Subscription)  same pattern as productId
  subscriptionName         (Subscription)
  subscriptionDescription  (Subscription)
  subscriptionBasis        (Subscription)  MONTHLY | QUARTERLY | SEMI_YEARLY | YEARLY
  price                    (shared)        non-negative number
  callbackDelivery         (shared)        ONLY_WHEN_PLAYER_ONLINE | ALLOW_OFFLINE_DELIVERY
  actions                  (shared)
    +-- success            list of command templates
    +-- expire             list of command templates (subscriptions)
    +-- renew              list of command templates (subscriptions)
  dependency               (shared)        identifier of another configuration, "" = none
  dependencyAmount         (shared)        int >= 1
  permission               (shared)        "" = no permission gate
  hideIfNoPermission       (shared)        bool
  displayItem              (shared)        catalog item id, e.g. DIAMOND

A configuration is a Subscription when both subscriptionId and
subscriptionName are non-empty; anything else is a Product.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class DeliveryType(Enum):
    ONLY_WHEN_PLAYER_ONLINE = "ONLY_WHEN_PLAYER_ONLINE"
    ALLOW_OFFLINE_DELIVERY = "ALLOW_OFFLINE_DELIVERY"


class SubscriptionBasis(Enum):
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    SEMI_YEARLY = "SEMI_YEARLY"
    YEARLY = "YEARLY"


class Variant(Enum):
    PRODUCT = "product"
    SUBSCRIPTION = "subscription"


# Builder-side constraint only; imported documents are not re-checked
IDENTIFIER_PATTERN = re.compile(r"^[a-z0-9_-]+$")

# Token the host plugin substitutes with the player's purchase count
PURCHASE_TIMES_TOKEN = "<purchase_times>"

ACTION_KINDS: tuple[str, ...] = ("success", "expire", "renew")

PRODUCT_ONLY_KEYS: tuple[str, ...] = (
    "productId",
    "productName",
    "productDescription",
    "repeatablePurchase",
)

SUBSCRIPTION_ONLY_KEYS: tuple[str, ...] = (
    "subscriptionId",
    "subscriptionName",
    "subscriptionDescription",
    "subscriptionBasis",
)


def is_subscription(subscription_id: str, subscription_name: str) -> bool:
    """Discriminant: both subscription id and name must be non-empty."""
    return bool(subscription_id) and bool(subscription_name)


def classify(subscription_id: str, subscription_name: str) -> Variant:
    if is_subscription(subscription_id, subscription_name):
        return Variant.SUBSCRIPTION
    return Variant.PRODUCT


@dataclass(frozen=True)
class PurchaseActions:
    success: tuple[str, ...] = ("",)
    expire: tuple[str, ...] = ("",)
    renew: tuple[str, ...] = ("",)

    def to_dict(self) -> dict[str, list[str]]:
        return {
            "success": list(self.success),
            "expire": list(self.expire),
            "renew": list(self.renew),
        }


@dataclass(frozen=True)
class PurchaseConfiguration:
    """One Product or Subscription.

    Both variants share the same flat field set, as on the wire. ``variant``
    is fixed at construction; when it is omitted it is derived from the
    subscription id and name.
    """

    # product options
    product_id: str = ""
    product_name: str = ""
    product_description: str = ""
    repeatable_purchase: bool = False

    # subscription options
    subscription_id: str = ""
    subscription_name: str = ""
    subscription_description: str = ""
    subscription_basis: SubscriptionBasis = SubscriptionBasis.MONTHLY

    # shared options
    price: int | float = 0
    delivery_type: DeliveryType = DeliveryType.ONLY_WHEN_PLAYER_ONLINE
    actions: PurchaseActions = field(default_factory=PurchaseActions)
    dependency: str = ""
    dependency_amount: int = 1
    permission: str = ""
    hide_if_no_permission: bool = False
    display_item: str = ""

    variant: Variant | None = None

    def __post_init__(self) -> None:
        if self.variant is None:
            object.__setattr__(
                self, "variant", classify(self.subscription_id, self.subscription_name)
            )

    @property
    def is_subscription(self) -> bool:
        return self.variant is Variant.SUBSCRIPTION

    @property
    def identifier(self) -> str:
        return self.subscription_id if self.is_subscription else self.product_id

    @property
    def name(self) -> str:
        return self.subscription_name if self.is_subscription else self.product_name

    @property
    def description(self) -> str:
        if self.is_subscription:
            return self.subscription_description
        return self.product_description

    @property
    def is_limited_by_times(self) -> bool:
        """True if the permission node is parameterised by purchase count."""
        return PURCHASE_TIMES_TOKEN in self.permission

    def to_document(self) -> dict[str, Any]:
        """Full external mapping, in wire order, with every field present."""
        return {
            "productId": self.product_id,
            "productName": self.product_name,
            "productDescription": self.product_description,
            "price": self.price,
            "callbackDelivery": self.delivery_type.value,
            "repeatablePurchase": self.repeatable_purchase,
            "subscriptionId": self.subscription_id,
            "subscriptionName": self.subscription_name,
            "subscriptionDescription": self.subscription_description,
            "subscriptionBasis": self.subscription_basis.value,
            "actions": self.actions.to_dict(),
            "dependency": self.dependency,
            "dependencyAmount": self.dependency_amount,
            "permission": self.permission,
            "hideIfNoPermission": self.hide_if_no_permission,
            "displayItem": self.display_item,
        }
