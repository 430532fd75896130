"""
User Entity for Scheduling Domain

Clients and service providers share the same record; the ``is_provider``
flag marks who can receive bookings. Users are managed elsewhere and are
read-only for the booking flow.
"""

from dataclasses import dataclass

from agenda.core.domain import Entity


@dataclass
class User(Entity[int]):
    """
    User entity.

    Example:
        ```python
        provider = User(id=7, name="Ana Souza", is_provider=True)
        provider.can_receive_bookings()  # True
        ```
    """

    name: str = ""
    email: str | None = None
    is_provider: bool = False

    def can_receive_bookings(self) -> bool:
        return self.is_provider

    def __str__(self) -> str:
        return f"{self.name} (ID: {self.id})"
