class NotFound(Exception):
    """A requested catalog record does not exist."""

    entity = "Record"

    def __init__(self, entity_id: str):
        self.entity_id = entity_id
        super().__init__(f"{self.entity} not found: {entity_id}")


class SailingNotFound(NotFound):
    entity = "Sailing"


class ShipNotFound(NotFound):
    entity = "Ship"


class CabinTypeNotFound(NotFound):
    entity = "Cabin type"
