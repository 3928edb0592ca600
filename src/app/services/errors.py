"""
Database Error Taxonomy

Every failure leaving the execution engine is one of three kinds:

- BackingStoreError: the store rejected the call (THROW in a procedure,
  duplicate key, business rule). Its message is store-authored and safe to
  surface to clients.
- TransportError: connection, timeout, protocol or any other unexpected
  failure. The message is generic; the original exception is chained.
- MappingError: a total-integer column is missing or has the wrong type.
  This is schema drift and must fail loudly.
"""


class DatabaseError(Exception):
    """Base class for all execution engine failures"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class BackingStoreError(DatabaseError):
    """The backing store raised a domain error"""


class TransportError(DatabaseError):
    """Connection, timeout or unexpected failure talking to the store"""


class MappingError(DatabaseError):
    """A result row does not match the documented column contract"""

    def __init__(self, column: str, message: str):
        self.column = column
        super().__init__(message)
