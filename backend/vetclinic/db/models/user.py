from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from vetclinic.db.base import Base


class UserRow(Base):
    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    username: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    # pbkdf2_sha256$<iterations>$<salt_hex>$<hash_hex>, never plaintext.
    password_hash: Mapped[str] = mapped_column(String, nullable=False)
    staff_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
