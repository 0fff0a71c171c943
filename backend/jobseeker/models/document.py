from sqlalchemy import Column, Text
from jobseeker.database import Base


class StoredDocument(Base):
    __tablename__ = "documents"

    collection = Column(Text, primary_key=True)
    id = Column(Text, primary_key=True)
    data = Column(Text, nullable=False)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)
