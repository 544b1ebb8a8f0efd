# backend/blueprint/models/data_field.py
from enum import Enum
from typing import Optional, TYPE_CHECKING
from uuid import UUID
from sqlalchemy import String, Text, Integer, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from blueprint.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from blueprint.models.msel import Msel
    from blueprint.models.inject import Inject, InjectType
    from blueprint.models.scenario_event import ScenarioEvent


class DataFieldType(str, Enum):
    STRING = "string"
    INTEGER = "integer"
    DOUBLE = "double"
    BOOLEAN = "boolean"
    DATETIME = "datetime"
    ORGANIZATION = "organization"
    CARD = "card"
    URL = "url"


class GalleryArticleParameter(str, Enum):
    """Article fields that a data field can be tagged to supply."""
    NAME = "Name"
    SUMMARY = "Summary"
    DESCRIPTION = "Description"
    MOVE = "Move"
    INJECT = "Inject"
    STATUS = "Status"
    SOURCE_TYPE = "SourceType"
    SOURCE_NAME = "SourceName"
    URL = "Url"
    DATE_POSTED = "DatePosted"
    OPEN_IN_NEW_TAB = "OpenInNewTab"
    CARD_ID = "CardId"
    TO_ORG = "ToOrg"
    DELIVERY_METHOD = "DeliveryMethod"


class DataField(Base, UUIDMixin, TimestampMixin):
    """Typed, named content slot. Belongs to an MSEL or an inject type, never both."""
    __tablename__ = "data_fields"

    msel_id: Mapped[Optional[UUID]] = mapped_column(
        ForeignKey("msels.id", ondelete="CASCADE"), nullable=True, index=True
    )
    inject_type_id: Mapped[Optional[UUID]] = mapped_column(
        ForeignKey("inject_types.id", ondelete="CASCADE"), nullable=True, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    data_type: Mapped[DataFieldType] = mapped_column(default=DataFieldType.STRING)
    display_order: Mapped[int] = mapped_column(Integer, default=0)
    gallery_article_parameter: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    msel: Mapped[Optional["Msel"]] = relationship("Msel", back_populates="data_fields")
    inject_type: Mapped[Optional["InjectType"]] = relationship("InjectType", back_populates="data_fields")

    __table_args__ = (
        CheckConstraint('msel_id IS NULL OR inject_type_id IS NULL', name='ck_data_field_single_owner'),
    )


class DataValue(Base, UUIDMixin, TimestampMixin):
    """Value of a data field. Belongs to a scenario event or an inject, never both."""
    __tablename__ = "data_values"

    value: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    data_field_id: Mapped[UUID] = mapped_column(
        ForeignKey("data_fields.id", ondelete="CASCADE"), nullable=False, index=True
    )
    scenario_event_id: Mapped[Optional[UUID]] = mapped_column(
        ForeignKey("scenario_events.id", ondelete="CASCADE"), nullable=True, index=True
    )
    inject_id: Mapped[Optional[UUID]] = mapped_column(
        ForeignKey("injects.id", ondelete="CASCADE"), nullable=True, index=True
    )

    data_field: Mapped["DataField"] = relationship("DataField")
    scenario_event: Mapped[Optional["ScenarioEvent"]] = relationship("ScenarioEvent", back_populates="data_values")
    inject: Mapped[Optional["Inject"]] = relationship("Inject", back_populates="data_values")

    __table_args__ = (
        CheckConstraint('scenario_event_id IS NULL OR inject_id IS NULL', name='ck_data_value_single_owner'),
    )
