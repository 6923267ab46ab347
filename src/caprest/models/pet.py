from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from caprest.models.base import InsertionOrderMixin, Base


class PetRecord(Base, InsertionOrderMixin):
    """Stored row for a pet. The key is chosen by the client."""

    __tablename__ = "pets"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    age: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
