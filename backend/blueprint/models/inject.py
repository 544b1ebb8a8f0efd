# backend/blueprint/models/inject.py
from typing import Optional, List, TYPE_CHECKING
from uuid import UUID
from sqlalchemy import String, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from blueprint.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from blueprint.models.data_field import DataField, DataValue


class InjectType(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "inject_types"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    data_fields: Mapped[List["DataField"]] = relationship(
        "DataField", back_populates="inject_type", cascade="all, delete-orphan"
    )


class Inject(Base, UUIDMixin, TimestampMixin):
    """Reusable templated content from the catalog."""
    __tablename__ = "injects"

    inject_type_id: Mapped[UUID] = mapped_column(
        ForeignKey("inject_types.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    inject_type: Mapped["InjectType"] = relationship("InjectType")
    data_values: Mapped[List["DataValue"]] = relationship(
        "DataValue", back_populates="inject", cascade="all, delete-orphan"
    )
