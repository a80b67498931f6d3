"""SQLAlchemy Unit of Work

Wraps the request-scoped AsyncSession shared by the bill repository.
"""

import logging
from sqlmodel.ext.asyncio.session import AsyncSession
from billflow.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """
    Commits or rolls back the session the repositories write through

    Repositories only flush; nothing reaches the database until commit().
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        if self.session.in_transaction():
            logger.debug("Rolling back open bill transaction")
        await self.session.rollback()
