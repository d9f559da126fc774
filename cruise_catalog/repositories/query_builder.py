from dataclasses import dataclass, field
from typing import List, Optional

from sqlalchemy import Column, and_, exists, literal, or_, select
from sqlalchemy.sql import ColumnElement, Select
from sqlalchemy.sql.selectable import FromClause

from cruise_catalog.core.enums import CabinCategory, SortDirection, SortField
from cruise_catalog.repositories.tables import (
    cruise_lines as lines,
    cruise_ports as ports,
    cruise_regions as regions,
    cruise_sailing_regions as sailing_regions,
    cruise_sailing_stops as stops,
    cruise_sailings as sailings,
    cruise_ships as ships,
)
from cruise_catalog.schemas.search_request import FilterSpec


@dataclass
class CompiledFilters:
    """AND-composed predicates plus the price column they were resolved against."""
    conditions: List[ColumnElement] = field(default_factory=list)
    price_column: Column = field(default_factory=lambda: sailings.c.cheapest_inside_cents)
    # Many-to-many, so it is applied as a join condition rather than a WHERE predicate.
    region_id: Optional[str] = None

    def where_clause(self) -> ColumnElement:
        return and_(*self.conditions)


def price_column_for(category: Optional[str]) -> Column:
    return sailings.c[CabinCategory.resolve(category).price_column()]


def sort_column_for(sort_by: SortField) -> Column:
    return {
        SortField.sail_date: sailings.c.sail_date,
        SortField.price:     sailings.c.cheapest_inside_cents,
        SortField.nights:    sailings.c.nights,
        SortField.ship_name: ships.c.name,
        SortField.line_name: lines.c.name,
    }.get(sort_by, sailings.c.sail_date)


def sailing_search_from() -> FromClause:
    """ Sailings with their ship and line, the FROM every search predicate assumes. """
    return (
        sailings
        .outerjoin(ships, sailings.c.ship_id == ships.c.id)
        .outerjoin(lines, sailings.c.cruise_line_id == lines.c.id)
    )


def text_search_condition(q: str) -> ColumnElement:
    """ Match sailing, ship, line and port names, plus any port of call or region label. """
    term = f"%{q}%"
    port_of_call = exists(
        select(literal(1))
        .select_from(stops.join(ports, stops.c.port_id == ports.c.id))
        .where(and_(stops.c.sailing_id == sailings.c.id, ports.c.name.ilike(term)))
    )
    region_label = exists(
        select(literal(1))
        .select_from(sailing_regions.join(regions, sailing_regions.c.region_id == regions.c.id))
        .where(and_(sailing_regions.c.sailing_id == sailings.c.id, regions.c.name.ilike(term)))
    )
    return or_(
        sailings.c.name.ilike(term),
        ships.c.name.ilike(term),
        lines.c.name.ilike(term),
        sailings.c.embark_port_name.ilike(term),
        sailings.c.disembark_port_name.ilike(term),
        port_of_call,
        region_label,
    )


def ports_of_call_condition(port_ids: List[str]) -> ColumnElement:
    return exists(
        select(literal(1))
        .select_from(stops)
        .where(and_(stops.c.sailing_id == sailings.c.id, stops.c.port_id.in_(port_ids)))
    )


def compile_filters(filters: FilterSpec) -> CompiledFilters:
    """ Turn a validated filter object into predicates; no database access. """
    where: List[ColumnElement] = [sailings.c.is_active.is_(True)]

    if filters.q:
        where.append(text_search_condition(filters.q))

    # direct FK equality
    for value, col in ((filters.cruise_line_id, sailings.c.cruise_line_id),
                       (filters.ship_id, sailings.c.ship_id),
                       (filters.embark_port_id, sailings.c.embark_port_id),
                       (filters.disembark_port_id, sailings.c.disembark_port_id)):
        if value:
            where.append(col == value)

    if filters.port_of_call_ids:
        where.append(ports_of_call_condition(list(filters.port_of_call_ids)))

    # inclusive ranges
    if filters.sail_date_from is not None:
        where.append(sailings.c.sail_date >= filters.sail_date_from)
    if filters.sail_date_to is not None:
        where.append(sailings.c.sail_date <= filters.sail_date_to)
    if filters.nights_min is not None:
        where.append(sailings.c.nights >= filters.nights_min)
    if filters.nights_max is not None:
        where.append(sailings.c.nights <= filters.nights_max)

    price_col = price_column_for(filters.cabin_category)
    if filters.price_min_cents is not None:
        where.append(price_col >= filters.price_min_cents)
    if filters.price_max_cents is not None:
        where.append(price_col <= filters.price_max_cents)

    return CompiledFilters(conditions=where, price_column=price_col, region_id=filters.region_id or None)


def apply_filters(query: Select, compiled: CompiledFilters, from_clause: Optional[FromClause] = None) -> Select:
    """ Attach the compiled predicates (and region join) to a sailings query. """
    src = from_clause if from_clause is not None else sailing_search_from()
    if compiled.region_id:
        src = src.join(sailing_regions, and_(
            sailing_regions.c.sailing_id == sailings.c.id,
            sailing_regions.c.region_id == compiled.region_id,
        ))
    return query.select_from(src).where(compiled.where_clause())


def apply_sorting(query: Select, sort_by: SortField, sort_dir: SortDirection) -> Select:
    col = sort_column_for(sort_by)
    if sort_dir == SortDirection.desc:
        return query.order_by(col.desc(), sailings.c.id.desc())
    return query.order_by(col.asc(), sailings.c.id.asc())
