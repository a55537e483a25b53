import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Integer, String, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from character_manager.db.database import Base

if TYPE_CHECKING:
    from character_manager.db.models.user import User

# --- 캐릭터(Character) 모델 ---
class Character(Base):
    __tablename__ = "characters"
    # 렐름 내 이름 중복 방지 (애플리케이션 검사와 별개로 저장소에서 보장)
    __table_args__ = (
        UniqueConstraint("name", "realm_id", name="uq_characters_name_realm"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(15), index=True, nullable=False)  # trim + 소문자
    level: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    faction_id: Mapped[int] = mapped_column(ForeignKey("faction_types.id"), nullable=False)
    race_id: Mapped[int] = mapped_column(ForeignKey("race_types.id"), nullable=False)
    class_id: Mapped[int] = mapped_column(ForeignKey("class_types.id"), nullable=False)
    realm_id: Mapped[int] = mapped_column(ForeignKey("realms.id"), nullable=False)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id"), index=True, nullable=False)

    # 관계 설정 (Relationships)
    user: Mapped["User"] = relationship("User", back_populates="characters")

    def __repr__(self) -> str:
        return f"<Character {self.id} {self.name}>"
