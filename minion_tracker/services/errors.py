"""Store-layer exceptions."""


class MinionTrackerError(Exception):
    """Base exception for the minion tracker."""


class MinionNotFoundError(MinionTrackerError):
    """Raised when no stat record exists for the requested id."""

    def __init__(self, minion_id: int):
        super().__init__(f"Minion {minion_id} not found")
        self.minion_id = minion_id


class MinionPersistenceError(MinionTrackerError):
    """Raised when the database fails. ``original`` is the engine's own exception."""

    def __init__(self, operation: str, original: Exception):
        super().__init__(f"{operation} failed: {original}")
        self.operation = operation
        self.original = original
