"""
Incremental builder for parameterized SQL with ordinal placeholders.

Values are bound in the order clauses are added and rendered as $1, $2, ...
so the statement text and the parameter list always agree. Clauses are kept
per section and assembled in SQL order when the statement is built.
"""

from sqlalchemy import bindparam, text
from sqlalchemy.sql.elements import TextClause
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
import re

PLACEHOLDER = "{}"
_ORDINAL = re.compile(r"\$(\d+)")


@dataclass(frozen=True)
class CompiledQuery:
    """SQL text with $n placeholders and the values bound to them, in order."""

    sql: str
    params: Tuple[Any, ...] = field(default_factory=tuple)

    @property
    def placeholder_count(self) -> int:
        return len(_ORDINAL.findall(self.sql))

    @property
    def bind_params(self) -> Dict[str, Any]:
        """Parameters keyed by the names used in to_statement()."""
        return {f"p{i}": value for i, value in enumerate(self.params, start=1)}

    def to_statement(self) -> TextClause:
        """
        Render as a SQLAlchemy text() clause with the values already bound.
        $n becomes the named bind :pn; the driver restores its own paramstyle.
        Bind types are inferred from the Python values.
        """
        statement = text(_ORDINAL.sub(lambda m: f":p{m.group(1)}", self.sql))
        return statement.bindparams(
            *(bindparam(name, value) for name, value in self.bind_params.items())
        )


class QueryBuilder:
    """
    Accumulates one SELECT statement.

    where() and having() take a condition containing a single "{}" where the
    bound value's placeholder goes. The first row-level predicate is
    introduced with WHERE and the rest with AND; likewise HAVING for
    aggregate predicates.
    """

    def __init__(self, base: str):
        self._base = base.strip()
        self._params: List[Any] = []
        self._where: List[str] = []
        self._having: List[str] = []
        self._group_by: Optional[str] = None
        self._order_by: Optional[str] = None
        self._limit: Optional[str] = None
        self.predicate_count = 0
        self.aggregate_predicate_count = 0

    def bind(self, value: Any) -> str:
        """Append a value and return its ordinal placeholder."""
        self._params.append(value)
        return f"${len(self._params)}"

    def _render(self, condition: str, value: Any) -> str:
        if condition.count(PLACEHOLDER) != 1:
            raise ValueError(f"Condition must contain exactly one '{PLACEHOLDER}': {condition!r}")
        return condition.replace(PLACEHOLDER, self.bind(value))

    def where(self, condition: str, value: Any) -> "QueryBuilder":
        """Add a row-level predicate applied before grouping."""
        if self._group_by is not None or self._having or self._limit is not None:
            # Placeholders would no longer follow textual order
            raise ValueError("Row-level predicates must be added before group_by(), having() and limit()")
        keyword = "WHERE" if self.predicate_count == 0 else "AND"
        self._where.append(f"{keyword} {self._render(condition, value)}")
        self.predicate_count += 1
        return self

    def group_by(self, expression: str) -> "QueryBuilder":
        self._group_by = expression
        return self

    def having(self, condition: str, value: Any) -> "QueryBuilder":
        """Add an aggregate predicate applied after grouping."""
        if self._limit is not None:
            raise ValueError("Aggregate predicates must be added before limit()")
        keyword = "HAVING" if self.aggregate_predicate_count == 0 else "AND"
        self._having.append(f"{keyword} {self._render(condition, value)}")
        self.aggregate_predicate_count += 1
        return self

    def order_by(self, expression: str) -> "QueryBuilder":
        self._order_by = expression
        return self

    def limit(self, value: int) -> "QueryBuilder":
        """Bind the row limit. It is always the last parameter."""
        self._limit = f"LIMIT {self.bind(value)}"
        return self

    def build(self) -> CompiledQuery:
        """Assemble the statement in SQL clause order."""
        parts = [self._base]
        parts.extend(self._where)
        if self._group_by:
            parts.append(f"GROUP BY {self._group_by}")
        parts.extend(self._having)
        if self._order_by:
            parts.append(f"ORDER BY {self._order_by}")
        if self._limit:
            parts.append(self._limit)
        return CompiledQuery("\n".join(parts), tuple(self._params))
