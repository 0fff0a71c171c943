from sqlalchemy import Column, Text
from jobseeker.database import Base


class Account(Base):
    __tablename__ = "accounts"

    uid = Column(Text, primary_key=True)
    email = Column(Text, nullable=False, unique=True)
    password_hash = Column(Text, nullable=False)
    created_at = Column(Text, nullable=False)
