"""Account linking OAuth para Smart Home.

- store.py: ExpiringStore (memoria / Redis)
- service.py: AccountLinkingService (códigos y tokens)
"""

from .service import AccountLinkingService, TokenGrant
from .store import ExpiringStore, InMemoryExpiringStore, RedisExpiringStore

__all__ = [
    "AccountLinkingService",
    "TokenGrant",
    "ExpiringStore",
    "InMemoryExpiringStore",
    "RedisExpiringStore",
]
