from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Role(str, Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    PLAYER = "player"


@dataclass(slots=True)
class Player:
    """
    Identity of whoever submitted an availability record. `name` is the
    display name and may be missing on partially joined rows.
    """

    id: Optional[str]
    name: Optional[str] = None
    role: Role = Role.PLAYER
    team_id: Optional[str] = None

    def __repr__(self) -> str:
        return (
            f"Player(id={self.id!r}, name={self.name!r}, role={self.role.value}, "
            f"team={self.team_id!r})"
        )

    def __post_init__(self) -> None:
        if self.id is not None:
            self.id = str(self.id)
        if self.name is not None:
            self.name = str(self.name).strip() or None
        self.role = Role(self.role)

    def display_name(self, placeholder: str = "Unknown Player") -> str:
        return self.name or placeholder

    @property
    def is_staff(self) -> bool:
        """Managers and admins edit any week."""
        return self.role in (Role.ADMIN, Role.MANAGER)
