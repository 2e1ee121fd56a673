"""
Errors raised by identifier allocation, parsing and validation.
"""


class IdentifierError(Exception):
    """Base class for every identifier error."""

    user_message = "Something went wrong while creating your ID. Please contact support."


class InvalidCategory(IdentifierError):
    """Unknown role / identifier class. Programmer error, not user-facing."""

    def __init__(self, category):
        self.category = category
        super().__init__(f"Invalid identifier category: {category!r}")


class MissingRegion(IdentifierError):
    """A region (state) is mandatory for user and event identifiers."""

    user_message = "Please select your state before registering."

    def __init__(self):
        super().__init__("A region is required to generate an identifier")


class SequenceExhausted(IdentifierError):
    """
    Every sequence number of a partition has been handed out.
    Operationally significant: nothing will succeed in this partition
    until the month rolls over.
    """

    def __init__(self, partition_key, capacity):
        self.partition_key = partition_key
        self.capacity = capacity
        super().__init__(
            f"Sequence exhausted for partition {partition_key} (capacity {capacity})"
        )


class AllocationConflict(IdentifierError):
    """Retries ran out while other writers kept winning the partition."""

    user_message = "We could not complete your registration right now. Please try again."

    def __init__(self, partition_key, attempts):
        self.partition_key = partition_key
        self.attempts = attempts
        super().__init__(
            f"Could not allocate a sequence for partition {partition_key} "
            f"after {attempts} attempt(s)"
        )


class MalformedIdentifier(IdentifierError):
    def __init__(self, identifier, reason):
        self.identifier = identifier
        self.reason = reason
        super().__init__(f"Malformed identifier {identifier!r}: {reason}")
