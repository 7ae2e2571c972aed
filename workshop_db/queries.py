"""
Query catalog: the fixed set of named, parameterized, read-only templates.

Templates are frozen and defined once at import. Adding a query means adding a
template to _CATALOG, never editing an existing one. Every selected column is
aliased to an application-facing name so callers never see storage column names.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, List, Mapping, Sequence, Tuple

from .core.errors import ArityError, OperationNotFoundError, ParameterTypeError

logger = logging.getLogger(__name__)

# storage column -> record field
FIELD_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "ident": "workshopId",
        "name": "workshopName",
        "duration": "workshopDuration",
    }
)

_SELECT_WORKSHOP = """
    SELECT
      Workshop.ident AS workshopId,
      Workshop.name AS workshopName,
      Workshop.duration AS workshopDuration
    FROM Workshop
"""


@dataclass(frozen=True)
class QueryTemplate:
    """
    One named query. arity is derived from param_names; param_types declares how
    textual input (CLI) is coerced before binding.
    """

    name: str
    sql: str
    param_names: Tuple[str, ...] = ()
    param_types: Tuple[type, ...] = ()
    description: str = ""
    fields: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if len(self.param_types) != len(self.param_names):
            raise ValueError(f"QueryTemplate {self.name}: param_types must match param_names")

    @property
    def arity(self) -> int:
        return len(self.param_names)

    def check_arity(self, parameters: Sequence[Any]) -> None:
        if len(parameters) != self.arity:
            raise ArityError(self.name, self.arity, len(parameters))

    def coerce(self, raw: Sequence[Any]) -> List[Any]:
        """Convert raw values (e.g. argv strings) to declared types. Arity is checked first."""
        self.check_arity(raw)
        out: List[Any] = []
        for pname, ptype, value in zip(self.param_names, self.param_types, raw):
            if isinstance(value, ptype):
                out.append(value)
                continue
            try:
                out.append(ptype(value))
            except (TypeError, ValueError):
                raise ParameterTypeError(
                    f"Operation '{self.name}': parameter {pname}={value!r} is not {ptype.__name__}"
                ) from None
        return out

    def signature(self) -> str:
        return f"{self.name}({', '.join(self.param_names)})"


_WORKSHOP_FIELDS = tuple(FIELD_ALIASES.values())

_CATALOG: Tuple[QueryTemplate, ...] = (
    QueryTemplate(
        name="get_all",
        sql=_SELECT_WORKSHOP + "    ORDER BY Workshop.ident",
        description="Every workshop, by identifier.",
        fields=_WORKSHOP_FIELDS,
    ),
    QueryTemplate(
        name="get_one",
        sql=_SELECT_WORKSHOP + "    WHERE Workshop.ident = ?",
        param_names=("ident",),
        param_types=(int,),
        description="The workshop with the given identifier (empty if none).",
        fields=_WORKSHOP_FIELDS,
    ),
    QueryTemplate(
        name="get_range",
        sql=_SELECT_WORKSHOP
        + "    WHERE Workshop.duration >= ? AND Workshop.duration <= ?\n    ORDER BY Workshop.ident",
        param_names=("low", "high"),
        param_types=(int, int),
        description="Workshops whose duration lies in [low, high].",
        fields=_WORKSHOP_FIELDS,
    ),
    QueryTemplate(
        name="get_stats",
        sql="""
    SELECT
      COUNT(*) AS workshopCount,
      MIN(Workshop.duration) AS minDuration,
      MAX(Workshop.duration) AS maxDuration,
      AVG(Workshop.duration) AS meanDuration
    FROM Workshop
""",
        description="Count and min/max/mean duration over all workshops.",
        fields=("workshopCount", "minDuration", "maxDuration", "meanDuration"),
    ),
    QueryTemplate(
        name="get_slice",
        # ?2/?1: bind order is (start, count) but LIMIT precedes OFFSET in SQL
        sql=_SELECT_WORKSHOP + "    ORDER BY Workshop.ident\n    LIMIT ?2 OFFSET ?1",
        param_names=("start", "count"),
        param_types=(int, int),
        description="count workshops starting at zero-based offset start.",
        fields=_WORKSHOP_FIELDS,
    ),
)


class QueryRegistry:
    """
    Read-only name -> QueryTemplate mapping.

    Usage:
        registry = QueryRegistry()
        template = registry.lookup("get_one")
        template.arity  # 1
    """

    def __init__(self, templates: Sequence[QueryTemplate] = _CATALOG) -> None:
        by_name = {}
        for t in templates:
            if t.name in by_name:
                raise ValueError(f"Duplicate query template name: {t.name}")
            by_name[t.name] = t
        self._templates: Mapping[str, QueryTemplate] = MappingProxyType(by_name)

    def lookup(self, name: str) -> QueryTemplate:
        template = self._templates.get(name)
        if template is None:
            logger.debug("Lookup miss for operation %r", name)
            raise OperationNotFoundError(name)
        return template

    def names(self) -> List[str]:
        return list(self._templates)

    def arities(self) -> dict:
        """Operation name -> arity; the whole contract HTTP/CLI collaborators need."""
        return {name: t.arity for name, t in self._templates.items()}

    def __contains__(self, name: object) -> bool:
        return name in self._templates

    def __iter__(self):
        return iter(self._templates.values())

    def __len__(self) -> int:
        return len(self._templates)


DEFAULT_REGISTRY = QueryRegistry()


def lookup(name: str) -> QueryTemplate:
    """Lookup in the default catalog."""
    return DEFAULT_REGISTRY.lookup(name)
