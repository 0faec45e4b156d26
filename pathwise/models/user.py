import uuid
from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship
from pathwise.db.database import Base


def generate_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_id)
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False, default="")
    # NULL for accounts created through Google sign-in
    hashed_password = Column(String, nullable=True)
    interests = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    skills = relationship("Skill", back_populates="user", order_by="Skill.position")
    career_paths = relationship("CareerPath", back_populates="user", order_by="CareerPath.position")
    resume = relationship("Resume", back_populates="user", uselist=False)


class Skill(Base):
    __tablename__ = "skills"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), ForeignKey("users.id"), index=True, nullable=False)
    name = Column(String, nullable=False)
    level = Column(String, nullable=False, default="")
    position = Column(Integer, nullable=False, default=0)

    user = relationship("User", back_populates="skills")


class CareerPath(Base):
    __tablename__ = "career_paths"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), ForeignKey("users.id"), index=True, nullable=False)
    title = Column(String, nullable=False)
    summary = Column(Text, nullable=False, default="")
    position = Column(Integer, nullable=False, default=0)

    user = relationship("User", back_populates="career_paths")


class Resume(Base):
    __tablename__ = "resumes"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), ForeignKey("users.id"), unique=True, nullable=False)
    summary = Column(Text, nullable=False, default="")
    education = Column(Text, nullable=False, default="")
    experience = Column(Text, nullable=False, default="")
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="resume")
