from typing import Any, Callable

from sqlalchemy import Integer, and_, or_, asc, desc
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql import operators
from sqlalchemy.sql.functions import FunctionElement


class substring_position(FunctionElement):
    """1-based, case-sensitive position of ``value`` in ``field``; 0 when absent."""
    type = Integer()
    name = "substring_position"
    inherit_cache = True


@compiles(substring_position)
def _compile_substring_position(element, compiler, **kw):
    field, value = list(element.clauses)
    return "POSITION(%s IN %s)" % (compiler.process(value, **kw), compiler.process(field, **kw))


@compiles(substring_position, "sqlite")
def _compile_substring_position_sqlite(element, compiler, **kw):
    # LIKE ignores ASCII case in SQLite; INSTR does not.
    field, value = list(element.clauses)
    return "INSTR(%s, %s)" % (compiler.process(field, **kw), compiler.process(value, **kw))


OPERATOR_MAPPING: dict[str, Callable[[Any, Any], Any]] = {
    "eq": operators.eq,
    "ne": operators.ne,
    "lt": operators.lt,
    "lte": operators.le,
    "gt": operators.gt,
    "gte": operators.ge,
    "in": lambda field, value: field.in_(value),
    "not_in": lambda field, value: ~field.in_(value),
    "contains": lambda field, value: substring_position(field, value) > 0,
    "icontains": lambda field, value: field.icontains(value, autoescape=True),
    "startswith": lambda field, value: field.startswith(value, autoescape=True),
    "istartswith": lambda field, value: field.istartswith(value, autoescape=True),
    "endswith": lambda field, value: field.endswith(value, autoescape=True),
    "iendswith": lambda field, value: field.iendswith(value, autoescape=True),
    "isnull": lambda field, value: field.is_(None) if value else field.isnot(None),
    "exact": operators.eq,  # alias for clarity
}


def document_field(document_column, field_name: str):
    """Text expression for a top-level field of a JSON document column."""
    return document_column[field_name].as_string()


def apply_filters_and_sorting(query, document_column, filters: dict, sort: list[str] = None, logic_operator: str = "and"):
    """
    Apply ``field__operator`` filters and ``field+``/``field-`` sorting to a query
    whose rows store their payload in ``document_column``.

    ``contains`` is case-sensitive on every dialect; use ``icontains`` otherwise.

    Example:
        query = apply_filters_and_sorting(
            select(IdentityItem),
            IdentityItem.body,
            filters={"flatten_role_ids__ne": "", "flatten_role_ids__contains": role_id},
            sort=["user_name+"],
        )
    """
    conditions = []
    logic_fn = and_ if logic_operator.lower() == "and" else or_

    # FILTERS
    for key, value in filters.items():
        parts = key.split("__")
        field_name = parts[0]
        operator_key = parts[1] if len(parts) > 1 else "eq"

        operator_func = OPERATOR_MAPPING.get(operator_key)
        if not operator_func:
            raise ValueError(f"Unsupported filter operator: {operator_key}")

        conditions.append(operator_func(document_field(document_column, field_name), value))

    if conditions:
        query = query.where(logic_fn(*conditions))

    # SORTING
    if sort:
        order_by = []
        for field in sort:
            direction = asc if field[-1] == "+" else desc
            order_by.append(direction(document_field(document_column, field[:-1])))

        query = query.order_by(*order_by)

    return query
