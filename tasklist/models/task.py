"""Task model and the enumerations used to order task listings."""

import enum
from datetime import datetime, timezone

from sqlalchemy import String, case
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

from tasklist.errors import TaskValidationError
from tasklist.extensions import db


TITLE_MAX_LENGTH = 255


def utcnow() -> datetime:
    """Naive UTC timestamp, as stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Priority(str, enum.Enum):
    """Task priority.

    Labels sort alphabetically as high < low < medium, so ordering always goes
    through ``rank`` instead of the label text.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return PRIORITY_RANKS[self]

    @classmethod
    def default(cls) -> "Priority":
        return cls.MEDIUM

    @classmethod
    def parse(cls, value: "str | Priority | None") -> "Priority":
        """Resolve a form value to a Priority.

        Args:
            value: Label such as ``"high"``, a Priority, or None for the default.

        Returns:
            The matching Priority.

        Raises:
            TaskValidationError: If the label is not one of low/medium/high.
        """
        if value is None:
            return cls.default()
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise TaskValidationError(f"Invalid priority: {value!r}", field="priority") from None


PRIORITY_RANKS: dict[Priority, int] = {
    Priority.LOW: 1,
    Priority.MEDIUM: 2,
    Priority.HIGH: 3,
}

# Rank for stored values outside the table (including NULL)
UNRANKED = 0


class SortBy(str, enum.Enum):
    """Listing order key."""

    OLD = "old"
    PRIORITY = "priority"


class SortDirection(str, enum.Enum):
    """Listing order direction."""

    ASC = "asc"
    DESC = "des"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str) and value.strip().lower() in ("desc", "descending"):
            return cls.DESC
        if isinstance(value, str) and value.strip().lower() == "ascending":
            return cls.ASC
        return None


class PriorityType(TypeDecorator):
    """Priority stored as its label in a VARCHAR column.

    Writes are validated through ``Priority.parse``. Labels outside the enumeration
    (rows written by other tools) load as None instead of failing the whole query,
    and rank as UNRANKED when ordering.
    """

    impl = String(10)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return Priority.parse(value).value

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        try:
            return Priority(value)
        except ValueError:
            return None


class Task(db.Model):
    """A single to-do item."""

    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    done: Mapped[bool] = mapped_column(default=False, nullable=False)
    priority: Mapped[Priority | None] = mapped_column(
        PriorityType(),
        default=Priority.MEDIUM,
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow, nullable=False)

    @classmethod
    def priority_rank(cls):
        """SQL expression mapping the priority column to its integer rank."""
        return case(
            {priority.value: rank for priority, rank in PRIORITY_RANKS.items()},
            value=cls.priority,
            else_=UNRANKED,
        )

    def __repr__(self) -> str:
        return f"<Task {self.id} {self.priority.value if self.priority else None} done={self.done}>"
