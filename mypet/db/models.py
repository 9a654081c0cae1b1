"""SQLAlchemy ORM models: pets, inventory stacks, purchase ledger."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all database models."""


class PetModel(Base):
    """ORM model for pets."""

    __tablename__ = "pets"

    pet_id: Mapped[str] = mapped_column(String, primary_key=True)
    owner_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    kind: Mapped[str] = mapped_column(String, nullable=False)
    age: Mapped[int] = mapped_column(Integer, default=0)

    # 바이탈 [0, 100]
    health: Mapped[int] = mapped_column(Integer, default=100)
    hunger: Mapped[int] = mapped_column(Integer, default=0)
    happiness: Mapped[int] = mapped_column(Integer, default=0)
    energy: Mapped[int] = mapped_column(Integer, default=0)
    cleanliness: Mapped[int] = mapped_column(Integer, default=0)

    coins: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    # FK 강제가 꺼진 SQLite에서도 삭제가 전파되도록 ORM cascade 병행
    inventory: Mapped[list["InventoryModel"]] = relationship(
        back_populates="pet", cascade="all, delete-orphan"
    )
    purchases: Mapped[list["PurchaseModel"]] = relationship(
        back_populates="pet", cascade="all, delete-orphan"
    )


class InventoryModel(Base):
    """ORM model for per-pet item stacks. quantity is never stored as 0."""

    __tablename__ = "inventory"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    pet_id: Mapped[str] = mapped_column(
        String, ForeignKey("pets.pet_id", ondelete="CASCADE"), nullable=False
    )
    item_id: Mapped[str] = mapped_column(String, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    pet: Mapped["PetModel"] = relationship(back_populates="inventory")

    __table_args__ = (
        UniqueConstraint("pet_id", "item_id", name="uq_inventory_pet_item"),
    )


class PurchaseModel(Base):
    """ORM model for the append-only purchase ledger."""

    __tablename__ = "purchases"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    pet_id: Mapped[str] = mapped_column(
        String, ForeignKey("pets.pet_id", ondelete="CASCADE"), nullable=False
    )
    item_id: Mapped[str] = mapped_column(String, nullable=False)
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    pet: Mapped["PetModel"] = relationship(back_populates="purchases")

    __table_args__ = (Index("idx_purchase_pet_created", "pet_id", "created_at"),)
