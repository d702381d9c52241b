from sqlalchemy import BigInteger, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from responsebot.models.orm.base import Base
from responsebot.services.responses.models.response import ResponseRecord


class ResponseORM(Base):
    """Row of the responses table."""

    __tablename__ = "responses"
    __table_args__ = (
        # Uniqueness is enforced here, not by the application
        Index("idx_guild_name", "guild_id", "name", unique=True),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True, init=False
    )
    guild_id: Mapped[str] = mapped_column(String, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    trigger: Mapped[str] = mapped_column(Text, nullable=False)
    response: Mapped[str] = mapped_column(Text, nullable=False)

    # Milliseconds since the epoch
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)

    @classmethod
    def from_record(cls, record: ResponseRecord) -> "ResponseORM":
        return cls(
            guild_id=record.guild_id,
            name=record.name,
            trigger=record.trigger,
            response=record.response,
            created_at=record.created_at,
        )

    def to_record(self) -> ResponseRecord:
        return ResponseRecord(
            guild_id=self.guild_id,
            name=self.name,
            trigger=self.trigger,
            response=self.response,
            created_at=self.created_at,
        )

    def __str__(self) -> str:
        return f"Response {self.name} in guild {self.guild_id} (trigger: {self.trigger})"
