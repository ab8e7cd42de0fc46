"""In-memory session collection of purchase configurations."""

import logging
from collections import Counter
from collections.abc import Iterable, Iterator

from .entities import PurchaseConfiguration

logger = logging.getLogger("plexpurchases_builder.store")


class ConfigurationStore:
    """Ordered list of configurations owned by the caller.

    Append and remove-by-position only; editing is remove + add. Identifiers
    are not required to be unique here, see ``duplicate_identifiers``.
    """

    def __init__(self, configurations: Iterable[PurchaseConfiguration] = ()):
        self._items: list[PurchaseConfiguration] = list(configurations)

    def add(self, configuration: PurchaseConfiguration) -> None:
        self._items.append(configuration)
        logger.debug("Added '%s' (%d total)", configuration.identifier, len(self._items))

    def extend(self, configurations: Iterable[PurchaseConfiguration]) -> int:
        """Append in order. Returns the number added."""
        before = len(self._items)
        self._items.extend(configurations)
        added = len(self._items) - before
        logger.debug("Added %d configurations (%d total)", added, len(self._items))
        return added

    def remove(self, index: int) -> PurchaseConfiguration:
        """Remove and return the configuration at ``index``."""
        if not 0 <= index < len(self._items):
            raise IndexError(f"No configuration at position {index} (have {len(self._items)})")
        removed = self._items.pop(index)
        logger.debug("Removed '%s' from position %d", removed.identifier, index)
        return removed

    def clear(self) -> None:
        self._items.clear()

    def identifiers(self) -> list[str]:
        return [c.identifier for c in self._items]

    def find(self, identifier: str) -> PurchaseConfiguration | None:
        """First configuration whose identifier matches, if any."""
        return next((c for c in self._items if c.identifier == identifier), None)

    def duplicate_identifiers(self) -> list[str]:
        counts = Counter(self.identifiers())
        return [identifier for identifier, n in counts.items() if n > 1]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[PurchaseConfiguration]:
        return iter(list(self._items))

    def __getitem__(self, index: int) -> PurchaseConfiguration:
        return self._items[index]
