from sqlalchemy import Column, String, Text, DateTime
from taskboard.database import Base
from taskboard.models.user import new_id, utcnow


class Project(Base):
    __tablename__ = "projects"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    # References users.id; not enforced by the store
    created_by = Column(String(32), index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
