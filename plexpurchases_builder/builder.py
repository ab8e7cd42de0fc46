"""Interactive builder: a mutable draft that becomes a configuration once valid.

These checks run only when authoring. Imported documents are normalized but
never run through ``validate_draft``.
"""

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass, field

from . import catalog
from .entities import (
    ACTION_KINDS,
    IDENTIFIER_PATTERN,
    DeliveryType,
    PurchaseActions,
    PurchaseConfiguration,
    SubscriptionBasis,
    Variant,
)
from .exporter import FILE_EXTENSION, filename_for

logger = logging.getLogger("plexpurchases_builder.builder")


class ValidationError(Exception):
    """Raised by ``build`` when a draft has one or more problems."""

    def __init__(self, errors: list[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


@dataclass
class ConfigurationDraft:
    """Partial configuration being filled in.

    The variant is chosen up front and drives which fields and action lists
    apply: products only use ``success``, subscriptions use all three.
    """

    variant: Variant
    identifier: str = ""
    name: str = ""
    description: str = ""
    price: int | float = 0
    delivery_type: DeliveryType = DeliveryType.ONLY_WHEN_PLAYER_ONLINE
    repeatable_purchase: bool = False
    subscription_basis: SubscriptionBasis = SubscriptionBasis.MONTHLY
    actions: dict[str, list[str]] = field(
        default_factory=lambda: {kind: [""] for kind in ACTION_KINDS}
    )
    dependency: str = ""
    dependency_amount: int = 1
    permission: str = ""
    hide_if_no_permission: bool = False
    display_item: str = ""

    @property
    def action_kinds(self) -> tuple[str, ...]:
        if self.variant is Variant.SUBSCRIPTION:
            return ACTION_KINDS
        return ("success",)

    def _check_kind(self, kind: str) -> None:
        if kind not in self.action_kinds:
            raise ValueError(f"'{kind}' actions do not apply to a {self.variant.value}")

    def add_action(self, kind: str, command: str = "") -> None:
        self._check_kind(kind)
        self.actions[kind].append(command)

    def set_action(self, kind: str, index: int, command: str) -> None:
        self._check_kind(kind)
        self.actions[kind][index] = command

    def remove_action(self, kind: str, index: int) -> None:
        """Remove one command. Each list keeps at least one entry."""
        self._check_kind(kind)
        if len(self.actions[kind]) <= 1:
            raise ValueError(f"'{kind}' must keep at least one action")
        del self.actions[kind][index]

    def to_configuration(self) -> PurchaseConfiguration:
        """Convert without validating."""
        actions = PurchaseActions(**{k: tuple(v) for k, v in self.actions.items()})
        shared = dict(
            price=self.price,
            delivery_type=self.delivery_type,
            actions=actions,
            dependency=self.dependency,
            dependency_amount=self.dependency_amount,
            permission=self.permission,
            hide_if_no_permission=self.hide_if_no_permission,
            display_item=self.display_item,
            variant=self.variant,
        )
        if self.variant is Variant.SUBSCRIPTION:
            return PurchaseConfiguration(
                subscription_id=self.identifier,
                subscription_name=self.name,
                subscription_description=self.description,
                subscription_basis=self.subscription_basis,
                **shared,
            )
        return PurchaseConfiguration(
            product_id=self.identifier,
            product_name=self.name,
            product_description=self.description,
            repeatable_purchase=self.repeatable_purchase,
            **shared,
        )


def validate_draft(
    draft: ConfigurationDraft, existing: Iterable[PurchaseConfiguration] = ()
) -> list[str]:
    """Return every problem with ``draft``; an empty list means it can be built."""
    label = "subscription" if draft.variant is Variant.SUBSCRIPTION else "product"
    errors: list[str] = []

    if not draft.identifier:
        errors.append(f"Please enter {label} ID")
    elif not IDENTIFIER_PATTERN.fullmatch(draft.identifier):
        errors.append(
            f"{label.capitalize()} ID may only contain lowercase letters, numbers, underscores and hyphens"
        )
    if not draft.name.strip():
        errors.append(f"Please enter {label} name")

    if isinstance(draft.price, bool) or not isinstance(draft.price, (int, float)) \
            or not math.isfinite(draft.price) or draft.price < 0:
        errors.append("Price must be a number of 0 or more")
    if isinstance(draft.dependency_amount, bool) or not isinstance(draft.dependency_amount, int) \
            or draft.dependency_amount < 1:
        errors.append("Dependency amount must be a whole number of at least 1")

    if draft.display_item and not catalog.exists(draft.display_item):
        errors.append(f"Unknown display item '{draft.display_item}'")

    existing = list(existing)
    if draft.dependency:
        if draft.dependency == draft.identifier:
            errors.append("A configuration cannot depend on itself")
        elif draft.dependency not in {c.identifier for c in existing}:
            errors.append(f"Dependency '{draft.dependency}' does not match any configuration")

    if draft.identifier:
        filename = f"{draft.identifier}{FILE_EXTENSION}"
        if any(filename_for(c) == filename for c in existing):
            errors.append(f"ID '{draft.identifier}' is already used by another configuration")

    return errors


def build(
    draft: ConfigurationDraft, existing: Iterable[PurchaseConfiguration] = ()
) -> PurchaseConfiguration:
    existing = list(existing)
    errors = validate_draft(draft, existing)
    if errors:
        logger.debug("Draft '%s' rejected: %s", draft.identifier, errors)
        raise ValidationError(errors)
    return draft.to_configuration()
