from sqlalchemy import Integer, String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from character_manager.db.database import Base

# --- 기준 데이터 테이블 (읽기 전용) ---

class FactionType(Base):
    __tablename__ = "faction_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False)


class RaceType(Base):
    __tablename__ = "race_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False)


class ClassType(Base):
    __tablename__ = "class_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False)


class Realm(Base):
    __tablename__ = "realms"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)  # Neutral / PVP


class CharacterMapping(Base):
    """Legal (faction, race, class) combination."""
    __tablename__ = "character_mappings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    faction_id: Mapped[int] = mapped_column(ForeignKey("faction_types.id"), nullable=False)
    race_id: Mapped[int] = mapped_column(ForeignKey("race_types.id"), nullable=False)
    class_id: Mapped[int] = mapped_column(ForeignKey("class_types.id"), nullable=False)
