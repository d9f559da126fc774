"""
Domain model for sailing facets.

Each facet is a first-class object that knows how to count active sailings per
option. Facets receive a :class:`FacetContext` carrying the session and the
current selections.

Narrowing rule: dependent facet lists are narrowed by the selected cruise line
only. Other selections do NOT narrow any facet.
"""

from abc import ABC, abstractmethod
from collections import OrderedDict
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from sqlalchemy import and_, func, select
from sqlalchemy.sql import ColumnElement, Select

from cruise_catalog.repositories.tables import (
    cruise_lines as lines,
    cruise_ports as ports,
    cruise_regions as regions,
    cruise_sailing_regions as sailing_regions,
    cruise_sailing_stops as stops,
    cruise_sailings as sailings,
    cruise_ships as ships,
)


class FacetType(Enum):
    """Types of facets supported by the system."""
    SIMPLE_COUNT = "simple_count"
    DEDUPLICATED_NAME = "deduplicated_name"


@dataclass
class FacetOption:
    """A single facet value with its count; ``all_ids`` lists every id merged into it."""
    id: str
    name: str
    count: int
    all_ids: Optional[List[str]] = None


@dataclass
class FacetResult:
    """Result of computing a facet."""
    facet_name: str
    facet_type: FacetType
    options: List[FacetOption]


@dataclass
class FacetContext:
    """Context object providing dependencies for facet computation."""
    db: Any  # Database session
    cruise_line_id: Optional[str] = None

    def conditions(self, narrow_by_line: bool = True) -> List[ColumnElement]:
        where: List[ColumnElement] = [sailings.c.is_active.is_(True)]
        if narrow_by_line and self.cruise_line_id:
            where.append(sailings.c.cruise_line_id == self.cruise_line_id)
        return where


class Facet(ABC):
    """Abstract base class for all facets."""

    # Whether the selected cruise line narrows this facet's options.
    narrows_by_line = True

    def __init__(self, name: str, facet_type: FacetType):
        self.name = name
        self.facet_type = facet_type

    @abstractmethod
    def compute(self, context: FacetContext) -> FacetResult:
        """Compute the facet options for the current selections."""


class SimpleCountFacet(Facet):
    """One option per reference row, counted over active sailings that reach it."""

    def __init__(self, name: str):
        super().__init__(name, FacetType.SIMPLE_COUNT)

    @abstractmethod
    def build_query(self) -> Select:
        """Select (id, name, count) grouped by the reference row; no WHERE yet."""

    def compute(self, context: FacetContext) -> FacetResult:
        query = self.build_query().where(and_(*context.conditions(self.narrows_by_line)))
        rows = context.db.execute(query).all()
        options = [
            FacetOption(id=opt_id, name=name, count=int(count))
            for opt_id, name, count in rows
            if opt_id is not None
        ]
        return FacetResult(facet_name=self.name, facet_type=self.facet_type, options=options)


class CruiseLineFacet(SimpleCountFacet):
    """Upstream-most dimension: never narrowed by its own selection."""

    narrows_by_line = False

    def __init__(self):
        super().__init__("cruise_lines")

    def build_query(self) -> Select:
        return (
            select(lines.c.id, lines.c.name, func.count(sailings.c.id))
            .select_from(lines.join(sailings, sailings.c.cruise_line_id == lines.c.id))
            .group_by(lines.c.id, lines.c.name)
            .order_by(lines.c.name)
        )


class ShipFacet(SimpleCountFacet):
    def __init__(self):
        super().__init__("ships")

    def build_query(self) -> Select:
        return (
            select(ships.c.id, ships.c.name, func.count(sailings.c.id))
            .select_from(ships.join(sailings, sailings.c.ship_id == ships.c.id))
            .group_by(ships.c.id, ships.c.name)
            .order_by(ships.c.name)
        )


class RegionFacet(SimpleCountFacet):
    def __init__(self):
        super().__init__("regions")

    def build_query(self) -> Select:
        return (
            select(regions.c.id, regions.c.name, func.count(func.distinct(sailing_regions.c.sailing_id)))
            .select_from(
                regions
                .join(sailing_regions, sailing_regions.c.region_id == regions.c.id)
                .join(sailings, sailings.c.id == sailing_regions.c.sailing_id)
            )
            .group_by(regions.c.id, regions.c.name)
            .order_by(regions.c.name)
        )


class EmbarkPortFacet(SimpleCountFacet):
    def __init__(self):
        super().__init__("embark_ports")

    def build_query(self) -> Select:
        return (
            select(ports.c.id, ports.c.name, func.count(sailings.c.id))
            .select_from(ports.join(sailings, sailings.c.embark_port_id == ports.c.id))
            .group_by(ports.c.id, ports.c.name)
            .order_by(ports.c.name)
        )


class DisembarkPortFacet(SimpleCountFacet):
    def __init__(self):
        super().__init__("disembark_ports")

    def build_query(self) -> Select:
        return (
            select(ports.c.id, ports.c.name, func.count(sailings.c.id))
            .select_from(ports.join(sailings, sailings.c.disembark_port_id == ports.c.id))
            .group_by(ports.c.id, ports.c.name)
            .order_by(ports.c.name)
        )


class PortOfCallFacet(Facet):
    """
    Ports visited during sailings, deduplicated by trimmed name.

    The catalog holds several port rows for the same physical port. Options are
    grouped on TRIM(name): ``count`` is the number of distinct sailings calling
    at any of the grouped ids, ``id`` is the first grouped id (lowest id), and
    ``all_ids`` carries every grouped id so callers can filter by any of them.
    This is best-effort deduplication; port names are not unique elsewhere.
    """

    def __init__(self):
        super().__init__("ports_of_call", FacetType.DEDUPLICATED_NAME)

    def _joined(self):
        return (
            ports
            .join(stops, stops.c.port_id == ports.c.id)
            .join(sailings, sailings.c.id == stops.c.sailing_id)
        )

    def compute(self, context: FacetContext) -> FacetResult:
        trimmed = func.trim(ports.c.name)
        where = and_(*context.conditions(self.narrows_by_line), stops.c.is_sea_day.is_(False))

        counts = dict(context.db.execute(
            select(trimmed, func.count(func.distinct(stops.c.sailing_id)))
            .select_from(self._joined())
            .where(where)
            .group_by(trimmed)
        ).all())

        ids_by_name: "OrderedDict[str, List[str]]" = OrderedDict()
        for name, port_id in context.db.execute(
            select(trimmed, ports.c.id)
            .select_from(self._joined())
            .where(where)
            .group_by(trimmed, ports.c.id)
            .order_by(trimmed, ports.c.id)
        ).all():
            ids_by_name.setdefault(name, []).append(port_id)

        options = [
            FacetOption(id=ids[0], name=name, count=int(counts.get(name, 0)), all_ids=ids)
            for name, ids in ids_by_name.items()
        ]
        return FacetResult(facet_name=self.name, facet_type=self.facet_type, options=options)


class FacetRegistry:
    """Registry and coordinator for all facets."""

    def __init__(self):
        self._facets: Dict[str, Facet] = {}
        self._register_default_facets()

    def _register_default_facets(self):
        self.register(CruiseLineFacet())
        self.register(ShipFacet())
        self.register(RegionFacet())
        self.register(EmbarkPortFacet())
        self.register(DisembarkPortFacet())
        self.register(PortOfCallFacet())

    def register(self, facet: Facet):
        self._facets[facet.name] = facet

    def get_facet(self, name: str) -> Optional[Facet]:
        return self._facets.get(name)

    def get_all_facets(self) -> List[Facet]:
        return list(self._facets.values())

    def compute_all_facets(self, context: FacetContext) -> Dict[str, List[FacetOption]]:
        """Compute every registered facet, keyed by facet name."""
        return {facet.name: facet.compute(context).options for facet in self._facets.values()}


# Global registry instance
facet_registry = FacetRegistry()
