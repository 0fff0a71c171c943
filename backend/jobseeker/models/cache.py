from sqlalchemy import Column, Text
from jobseeker.database import Base


class CacheEntry(Base):
    __tablename__ = "local_cache"

    key = Column(Text, primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)
