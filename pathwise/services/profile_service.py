from typing import Optional
from loguru import logger
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from pathwise.core.exceptions import NotFoundError, StorageUnavailableError
from pathwise.models.user import CareerPath, Resume, Skill, User
from pathwise.schemas.profile import ProfileUpdate, ResumeBase


class ProfileService:
    @staticmethod
    async def get_profile(db: Session, user_id: str) -> User:
        """Get a user with skills, career paths and resume loaded."""
        try:
            user = (
                db.query(User)
                .options(
                    selectinload(User.skills),
                    selectinload(User.career_paths),
                    selectinload(User.resume),
                )
                .filter(User.id == user_id)
                .first()
            )
        except SQLAlchemyError as e:
            raise StorageUnavailableError() from e
        if not user:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    async def apply_profile_update(db: Session, user_id: str, profile_in: ProfileUpdate) -> User:
        """Replace a user's profile in a single transaction.

        Interests are overwritten when given, skills and career paths are deleted and
        re-inserted, and the resume is upserted. Any failure rolls back every
        write made by this call. The returned user is refreshed but its
        associations are not reloaded.
        """
        try:
            values = {User.updated_at: func.now()}
            if profile_in.interests is not None:
                values[User.interests] = list(profile_in.interests)
            updated = (
                db.query(User)
                .filter(User.id == user_id)
                .update(values, synchronize_session=False)
            )
            if updated == 0:
                raise NotFoundError("User not found")

            db.query(Skill).filter(Skill.user_id == user_id).delete(synchronize_session=False)
            db.query(CareerPath).filter(CareerPath.user_id == user_id).delete(synchronize_session=False)

            if profile_in.skills:
                db.add_all([
                    Skill(user_id=user_id, name=skill.name, level=skill.level, position=index)
                    for index, skill in enumerate(profile_in.skills)
                ])
            if profile_in.career_paths:
                db.add_all([
                    CareerPath(user_id=user_id, title=path.title, summary=path.summary, position=index)
                    for index, path in enumerate(profile_in.career_paths)
                ])
            db.flush()

            if profile_in.resume is not None:
                ProfileService._upsert_resume(db, user_id, profile_in.resume)

            db.commit()
        except NotFoundError:
            db.rollback()
            raise
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to save profile for user {user_id}: {e}")
            raise StorageUnavailableError() from e

        # Drop stale identity-map state left by the bulk statements
        db.expire_all()
        user = db.query(User).filter(User.id == user_id).first()
        logger.info(
            f"Saved profile for user {user_id}: "
            f"{len(profile_in.skills)} skills, {len(profile_in.career_paths)} career paths"
        )
        return user

    @staticmethod
    def _upsert_resume(db: Session, user_id: str, resume_in: ResumeBase) -> Resume:
        resume: Optional[Resume] = db.query(Resume).filter(Resume.user_id == user_id).first()
        if resume is None:
            resume = Resume(user_id=user_id)
            db.add(resume)
        resume.summary = resume_in.summary
        resume.education = resume_in.education
        resume.experience = resume_in.experience
        db.flush()
        return resume
