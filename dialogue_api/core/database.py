# dialogue_api/core/database.py
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from prisma import Prisma

# Global Prisma instance, created on first use
_prisma: Optional["Prisma"] = None


def get_client() -> "Prisma":
    """
    Return the process-wide Prisma client.

    The import is deferred: the ``prisma`` client module only exists once
    ``prisma generate`` has run against prisma/schema.prisma.
    """
    global _prisma
    if _prisma is None:
        from prisma import Prisma

        _prisma = Prisma()
    return _prisma



async def get_db() -> "Prisma":
    """Database dependency for FastAPI dependency injection."""
    return get_client()
