class UniqueConstraintViolation(Exception):
    """Raised by a repository when a write collides with a unique constraint"""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Unique constraint violated on {field}")
