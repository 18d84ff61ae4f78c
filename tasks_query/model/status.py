"""Task statuses and the registry mapping checkbox symbols to them."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class StatusType(Enum):
    """Behavioural category of a status symbol."""

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"
    CANCELLED = "CANCELLED"
    NON_TASK = "NON_TASK"

    @property
    def is_completed(self) -> bool:
        return self in (StatusType.DONE, StatusType.CANCELLED, StatusType.NON_TASK)


# Position of each type in "sort by status.type" and "group by status.type"
STATUS_TYPE_ORDER: dict[StatusType, int] = {
    StatusType.IN_PROGRESS: 1,
    StatusType.TODO: 2,
    StatusType.DONE: 3,
    StatusType.CANCELLED: 4,
    StatusType.NON_TASK: 5,
}


@dataclass(frozen=True)
class Status:
    """A checkbox symbol and what it means.

    Attributes:
        symbol: Character between the checkbox brackets, e.g. ``"x"``.
        name: Human readable name, e.g. ``"Done"``.
        next_status_symbol: Symbol the status toggles to.
        type: Behavioural category.
    """

    symbol: str
    name: str
    next_status_symbol: str
    type: StatusType

    @property
    def is_completed(self) -> bool:
        return self.type.is_completed


TODO = Status(" ", "Todo", "x", StatusType.TODO)
DONE = Status("x", "Done", " ", StatusType.DONE)
IN_PROGRESS = Status("/", "In Progress", "x", StatusType.IN_PROGRESS)
CANCELLED = Status("-", "Cancelled", " ", StatusType.CANCELLED)

DEFAULT_STATUSES: tuple[Status, ...] = (
    TODO,
    DONE,
    Status("X", "Done", " ", StatusType.DONE),
    IN_PROGRESS,
    CANCELLED,
)


class StatusRegistry:
    """Symbol to Status lookup.

    Each registry is an independent value; callers that need custom
    statuses build their own instead of mutating a shared one.
    """

    def __init__(self, statuses: Iterable[Status] = DEFAULT_STATUSES) -> None:
        self._by_symbol: dict[str, Status] = {}
        for status in statuses:
            self._by_symbol.setdefault(status.symbol, status)

    def __len__(self) -> int:
        return len(self._by_symbol)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._by_symbol

    def add(self, status: Status) -> str | None:
        """Register a status.

        Returns:
            A warning message if the symbol is already registered, else None.
        """
        if status.symbol in self._by_symbol:
            message = f'The symbol "{status.symbol}" is already in use.'
            logger.debug(message)
            return message
        self._by_symbol[status.symbol] = status
        return None

    def bulk_add(self, statuses: Iterable[Status]) -> list[str]:
        """Register several statuses, collecting warnings for duplicates."""
        warnings: list[str] = []
        for status in statuses:
            warning = self.add(status)
            if warning is not None:
                warnings.append(warning)
        return warnings

    def by_symbol(self, symbol: str) -> Status:
        """Look up a symbol; unknown symbols behave like an open task."""
        status = self._by_symbol.get(symbol)
        if status is None:
            return Status(symbol, "Unknown", "x", StatusType.TODO)
        return status
