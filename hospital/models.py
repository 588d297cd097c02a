from __future__ import annotations

from sqlalchemy import Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from .db import Base


class Doctor(Base):
    __tablename__ = "doctors"
    # AUTOINCREMENT: ids of deleted rows are never handed out again
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    specialty: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"Doctor({self.id}, {self.name}, {self.specialty})"


class Patient(Base):
    __tablename__ = "patients"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    ailment: Mapped[str | None] = mapped_column(Text, nullable=True)

    # 0 = unassigned; not declared as a FOREIGN KEY
    doctor_id: Mapped[int | None] = mapped_column(Integer, default=0, server_default=text("0"))

    def __repr__(self) -> str:
        return f"Patient({self.id}, {self.name}, doctor={self.doctor_id})"
