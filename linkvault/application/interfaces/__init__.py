"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from linkvault.infrastructure or linkvault.api.
"""

from linkvault.application.interfaces.repositories import (
    ICategoryRepository,
    ILinkRepository,
    IUserRepository,
)
from linkvault.application.interfaces.services import IAuthSecurity, ICacheService

__all__ = [
    "IAuthSecurity",
    "ICacheService",
    "ICategoryRepository",
    "ILinkRepository",
    "IUserRepository",
]
