"""Checks that predict how the PlexPurchases plugin will treat exported files.

The plugin looks purchases up by productId and skips files without a
non-blank productId, a non-blank productName or a positive price. Exported
subscription files carry neither key, so the loader skips all of them.
Those are errors here; softer problems are warnings.
"""

import logging
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass

from . import catalog
from .entities import PurchaseConfiguration
from .exporter import filename_for

logger = logging.getLogger("plexpurchases_builder.lint")

ERROR = "error"
WARNING = "warning"


@dataclass(frozen=True)
class LintIssue:
    severity: str
    identifier: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"severity": self.severity, "identifier": self.identifier, "message": self.message}


def lint_configuration(
    configuration: PurchaseConfiguration,
    by_id: dict[str, PurchaseConfiguration],
) -> list[LintIssue]:
    ident = configuration.identifier
    issues: list[LintIssue] = []

    def add(severity: str, message: str) -> None:
        issues.append(LintIssue(severity, ident, message))

    if configuration.is_subscription:
        # Projection drops productId/productName from subscription files
        add(ERROR, "subscription files have no productId or productName; the plugin loader skips them")
    else:
        if not configuration.product_id.strip():
            add(ERROR, "missing productId; the plugin skips configurations without one")
        if not configuration.product_name.strip():
            add(ERROR, "missing productName; the plugin skips configurations without one")
    if configuration.price <= 0:
        add(ERROR, f"price {configuration.price} is not positive; the plugin rejects it")

    if not any(cmd.strip() for cmd in configuration.actions.success):
        add(WARNING, "no success actions; delivery must be handled by another plugin")

    if configuration.dependency:
        target = by_id.get(configuration.dependency)
        if target is None:
            add(WARNING, f"dependency '{configuration.dependency}' does not match any configuration")
        elif configuration.dependency_amount > 1 and not (
            target.is_subscription or target.repeatable_purchase
        ):
            add(
                WARNING,
                f"dependencyAmount {configuration.dependency_amount} has no effect: "
                f"'{target.identifier}' can only be bought once",
            )

    if configuration.hide_if_no_permission and not configuration.permission:
        add(WARNING, "hideIfNoPermission is set but no permission is configured")

    if configuration.display_item and not catalog.exists(configuration.display_item):
        add(WARNING, f"unknown display item '{configuration.display_item}'")

    return issues


def lint_configurations(configurations: Iterable[PurchaseConfiguration]) -> list[LintIssue]:
    """Lint every configuration plus archive-level filename collisions."""
    configurations = list(configurations)
    by_id: dict[str, PurchaseConfiguration] = {}
    for c in configurations:
        by_id.setdefault(c.identifier, c)

    issues: list[LintIssue] = []
    for configuration in configurations:
        issues.extend(lint_configuration(configuration, by_id))

    counts = Counter(filename_for(c) for c in configurations)
    for filename, n in counts.items():
        if n > 1:
            issues.append(LintIssue(
                ERROR,
                filename.rsplit(".", 1)[0],
                f"{n} configurations export to '{filename}'; only the last one is kept",
            ))

    logger.info(
        "Linted %d configurations: %d errors, %d warnings",
        len(configurations),
        sum(1 for i in issues if i.severity == ERROR),
        sum(1 for i in issues if i.severity == WARNING),
    )
    return issues
