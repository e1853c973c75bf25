"""Error taxonomy for the matching core."""


class MarketplaceError(Exception):
    """Base class for marketplace failures."""


class NotFoundError(MarketplaceError):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity: str, entity_id: object) -> None:
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class DataIntegrityError(MarketplaceError):
    """Raised when an association references a missing food attribute."""

    def __init__(self, association: str, owner_id: int, attribute_id: int) -> None:
        super().__init__(
            f"{association} for {owner_id} references missing food attribute "
            f"{attribute_id}"
        )
        self.association = association
        self.owner_id = owner_id
        self.attribute_id = attribute_id


class StorageUnavailableError(MarketplaceError):
    """Raised when the storage backend cannot be reached. Safe to retry."""


class InvalidRequestError(MarketplaceError, ValueError):
    """Raised when caller-supplied input breaks a domain rule."""
