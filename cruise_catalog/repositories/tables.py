"""
Core table definitions for the cruise catalog.

The import pipeline owns these tables; this service only reads them. JSON
metadata columns are exposed under the key ``meta`` to keep them apart from
``Table.metadata``.
"""

from sqlalchemy import (
    JSON, Boolean, Column, Date, DateTime, ForeignKey, Integer, MetaData, String, Table, Text, Time,
)

metadata = MetaData()

cruise_lines = Table("cruise_lines", metadata,
    Column("id", String, primary_key=True),
    Column("name", String(255), nullable=False),
    Column("metadata", JSON, key="meta"),
)

cruise_ships = Table("cruise_ships", metadata,
    Column("id", String, primary_key=True),
    Column("name", String(255), nullable=False),
    Column("cruise_line_id", String, ForeignKey("cruise_lines.id")),
    Column("ship_class", String(100)),
    Column("image_url", Text),
    Column("metadata", JSON, key="meta"),
)

cruise_ports = Table("cruise_ports", metadata,
    Column("id", String, primary_key=True),
    Column("name", String(255), nullable=False),
    Column("metadata", JSON, key="meta"),
)

cruise_regions = Table("cruise_regions", metadata,
    Column("id", String, primary_key=True),
    Column("name", String(255), nullable=False),
)

cruise_sailings = Table("cruise_sailings", metadata,
    Column("id", String, primary_key=True),
    Column("provider", String(100), nullable=False, default="traveltek"),
    Column("provider_identifier", String(100), nullable=False),
    Column("ship_id", String, ForeignKey("cruise_ships.id"), nullable=False),
    Column("cruise_line_id", String, ForeignKey("cruise_lines.id"), nullable=False),
    Column("embark_port_id", String, ForeignKey("cruise_ports.id")),
    Column("disembark_port_id", String, ForeignKey("cruise_ports.id")),
    Column("name", String(500), nullable=False),
    Column("sail_date", Date, nullable=False),
    Column("end_date", Date, nullable=False),
    Column("nights", Integer, nullable=False),
    Column("embark_port_name", String(255)),
    Column("disembark_port_name", String(255)),
    Column("cheapest_inside_cents", Integer),
    Column("cheapest_oceanview_cents", Integer),
    Column("cheapest_balcony_cents", Integer),
    Column("cheapest_suite_cents", Integer),
    Column("market_id", Integer),
    Column("no_fly", Boolean),
    Column("depart_uk", Boolean),
    Column("metadata", JSON, key="meta"),
    Column("last_synced_at", DateTime(timezone=True)),
    Column("is_active", Boolean, nullable=False, default=True),
    Column("created_at", DateTime(timezone=True)),
    Column("updated_at", DateTime(timezone=True)),
)

cruise_sailing_regions = Table("cruise_sailing_regions", metadata,
    Column("sailing_id", String, ForeignKey("cruise_sailings.id"), primary_key=True),
    Column("region_id", String, ForeignKey("cruise_regions.id"), primary_key=True),
    Column("is_primary", Boolean, nullable=False, default=False),
)

cruise_sailing_stops = Table("cruise_sailing_stops", metadata,
    Column("id", String, primary_key=True),
    Column("sailing_id", String, ForeignKey("cruise_sailings.id"), nullable=False),
    Column("port_id", String, ForeignKey("cruise_ports.id")),
    Column("port_name", String(255), nullable=False),
    Column("is_sea_day", Boolean, nullable=False, default=False),
    Column("day_number", Integer, nullable=False),
    Column("sequence_order", Integer, nullable=False, default=0),
    Column("arrival_time", Time),
    Column("departure_time", Time),
)

cruise_sailing_cabin_prices = Table("cruise_sailing_cabin_prices", metadata,
    Column("id", String, primary_key=True),
    Column("sailing_id", String, ForeignKey("cruise_sailings.id"), nullable=False),
    Column("cabin_code", String(20), nullable=False),
    Column("cabin_category", String(50), nullable=False),
    Column("occupancy", Integer, nullable=False, default=2),
    Column("base_price_cents", Integer, nullable=False),
    Column("taxes_cents", Integer, nullable=False, default=0),
    Column("is_per_person", Integer, nullable=False, default=1),
)

cruise_ship_images = Table("cruise_ship_images", metadata,
    Column("id", String, primary_key=True),
    Column("ship_id", String, ForeignKey("cruise_ships.id"), nullable=False),
    Column("image_url", Text, nullable=False),
    Column("thumbnail_url", Text),
    Column("alt_text", String(500)),
    Column("image_type", String(50)),
    Column("display_order", Integer, nullable=False, default=0),
    Column("is_hero", Boolean, nullable=False, default=False),
)

cruise_ship_decks = Table("cruise_ship_decks", metadata,
    Column("id", String, primary_key=True),
    Column("ship_id", String, ForeignKey("cruise_ships.id"), nullable=False),
    Column("name", String(100), nullable=False),
    Column("deck_number", Integer),
    Column("deck_plan_url", Text),
    Column("description", Text),
    Column("display_order", Integer, nullable=False, default=0),
    Column("metadata", JSON, key="meta"),
)

cruise_ship_cabin_types = Table("cruise_ship_cabin_types", metadata,
    Column("id", String, primary_key=True),
    Column("ship_id", String, ForeignKey("cruise_ships.id"), nullable=False),
    Column("cabin_code", String(20), nullable=False),
    Column("cabin_category", String(50), nullable=False),
    Column("name", String(255), nullable=False),
)

cruise_cabin_images = Table("cruise_cabin_images", metadata,
    Column("id", String, primary_key=True),
    Column("cabin_type_id", String, ForeignKey("cruise_ship_cabin_types.id"), nullable=False),
    Column("image_url", Text, nullable=False),
    Column("image_url_hd", Text),
    Column("image_url_2k", Text),
    Column("caption", String(500)),
    Column("display_order", Integer, nullable=False, default=0),
    Column("is_default", Boolean, nullable=False, default=False),
)

cruise_alternate_sailings = Table("cruise_alternate_sailings", metadata,
    Column("id", String, primary_key=True),
    Column("sailing_id", String, ForeignKey("cruise_sailings.id"), nullable=False),
    Column("alternate_sailing_id", String, ForeignKey("cruise_sailings.id")),
    Column("alternate_provider_identifier", String(100), nullable=False),
    Column("alternate_sail_date", Date),
    Column("alternate_nights", Integer),
    Column("alternate_lead_price_cents", Integer),
)
