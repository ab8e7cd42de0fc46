"""Admission and normalization of untyped configuration documents.

Decoded YAML is untrusted: any key may be missing or hold the wrong type.
``normalize`` never raises for a bad field, it substitutes the default and
moves on.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .entities import (
    ACTION_KINDS,
    DeliveryType,
    PurchaseActions,
    PurchaseConfiguration,
    SubscriptionBasis,
    classify,
)

logger = logging.getLogger("plexpurchases_builder.normalizer")

DEFAULT_ACTION: tuple[str, ...] = ("",)


@dataclass(frozen=True)
class Accepted:
    configuration: PurchaseConfiguration


@dataclass(frozen=True)
class Rejected:
    reason: str


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    # YAML turns ids like 2024 into numbers
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _flag(value: Any) -> bool:
    return value if isinstance(value, bool) else False


def _price(value: Any) -> int | float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if value != value or value < 0:  # NaN or negative
        return 0
    return value


def _amount(value: Any) -> int:
    if isinstance(value, bool):
        return 1
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, int) and value >= 1:
        return value
    return 1


def _member(enum_cls: type[Enum], value: Any, default: Enum) -> Any:
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls[value.strip().upper()]
        except KeyError:
            pass
    return default


def _action_item(item: Any) -> str:
    if item is None:
        return ""
    return item if isinstance(item, str) else str(item)


def _action_list(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple)):
        return tuple(_action_item(item) for item in value)
    return DEFAULT_ACTION


def _actions(value: Any) -> PurchaseActions:
    if isinstance(value, PurchaseActions):
        return value
    if not isinstance(value, Mapping):
        return PurchaseActions()
    return PurchaseActions(**{kind: _action_list(value.get(kind)) for kind in ACTION_KINDS})


def accepts(doc: Any) -> bool:
    """Whether ``doc`` looks like a configuration at all.

    The only requirement is a non-empty productId or subscriptionId.
    """
    if not isinstance(doc, Mapping):
        return False
    return bool(_text(doc.get("productId")) or _text(doc.get("subscriptionId")))


def normalize(doc: Mapping[str, Any]) -> PurchaseConfiguration:
    """Build a fully defaulted configuration from an untyped mapping."""
    subscription_id = _text(doc.get("subscriptionId"))
    subscription_name = _text(doc.get("subscriptionName"))

    configuration = PurchaseConfiguration(
        product_id=_text(doc.get("productId")),
        product_name=_text(doc.get("productName")),
        product_description=_text(doc.get("productDescription")),
        repeatable_purchase=_flag(doc.get("repeatablePurchase")),
        subscription_id=subscription_id,
        subscription_name=subscription_name,
        subscription_description=_text(doc.get("subscriptionDescription")),
        subscription_basis=_member(
            SubscriptionBasis, doc.get("subscriptionBasis"), SubscriptionBasis.MONTHLY
        ),
        price=_price(doc.get("price")),
        delivery_type=_member(
            DeliveryType, doc.get("callbackDelivery"), DeliveryType.ONLY_WHEN_PLAYER_ONLINE
        ),
        actions=_actions(doc.get("actions")),
        dependency=_text(doc.get("dependency")),
        dependency_amount=_amount(doc.get("dependencyAmount")),
        permission=_text(doc.get("permission")),
        hide_if_no_permission=_flag(doc.get("hideIfNoPermission")),
        display_item=_text(doc.get("displayItem")),
        variant=classify(subscription_id, subscription_name),
    )
    logger.debug("Normalized %s '%s'", configuration.variant.value, configuration.identifier)
    return configuration


def evaluate(doc: Any) -> Accepted | Rejected:
    """Admission gate plus normalization for a single candidate document."""
    if not isinstance(doc, Mapping):
        return Rejected(f"not a mapping ({type(doc).__name__})")
    if not accepts(doc):
        return Rejected("missing productId and subscriptionId")
    return Accepted(normalize(doc))
