class DepartmentNotFound(Exception):
    """Raised when a reading references a department that does not exist."""

    def __init__(self, department_id):
        self.department_id = department_id
        super().__init__(f"Department not found with id: {department_id}")


class InvalidSourceType(ValueError):
    """Raised when a reading's source type is not one of the recognised values."""

    def __init__(self, source_type):
        self.source_type = source_type
        super().__init__(f"Unrecognised source type: {source_type!r}")


class InvalidPriority(ValueError):
    """Raised when a suggestion priority filter is not LOW, MEDIUM or HIGH."""

    def __init__(self, priority):
        self.priority = priority
        super().__init__(f"Unrecognised priority: {priority!r}")


class SeedDataAlreadyLoaded(Exception):
    """Raised when initialisation is requested but departments already exist."""

    def __init__(self, department_count):
        self.department_count = department_count
        super().__init__(
            "Test data already exists. Use /reset-and-initialize to reload."
        )


class SeedDataError(Exception):
    """Raised when the seed document cannot be read or is structurally malformed."""

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load seed data from {path}: {reason}")
