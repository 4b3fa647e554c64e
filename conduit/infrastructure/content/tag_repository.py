"""
Adapter: Tag repository.

Implements TagRepository port on a SQLAlchemy session.
Tags are written by the article repository; this adapter only reads.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from conduit.domain.content.ports import TagRepository
from conduit.infrastructure.content.orm_models import TagRow


class TagRepositoryAdapter(TagRepository):
    def __init__(self, session: Session) -> None:
        self._session = session

    def list_names(self) -> list[str]:
        return list(self._session.scalars(select(TagRow.name).order_by(TagRow.name)))
