"""
Guardian link repository.
"""

from typing import Optional

from sqlalchemy import or_
from sqlmodel import Session, select

from app.models.enums import GuardianStatus
from app.models.guardian_link import GuardianLink


class GuardianLinkRepository:
    """Repository for GuardianLink database operations."""

    def __init__(self, session: Session):
        self.session = session

    def stage(self, link: GuardianLink) -> GuardianLink:
        """Add and flush without committing."""
        self.session.add(link)
        self.session.flush()
        return link

    def get_by_id(self, link_id: int) -> Optional[GuardianLink]:
        return self.session.get(GuardianLink, link_id)

    def get_by_key(self, guardian_email: str, minor_email: str) -> Optional[GuardianLink]:
        statement = select(GuardianLink).where(GuardianLink.guardian_email == guardian_email.lower(),
                                               GuardianLink.minor_email == minor_email.lower(), )
        return self.session.exec(statement).first()

    def for_user(self, email: str) -> list[GuardianLink]:
        """Links where ``email`` is either the guardian or the minor."""
        email = email.lower()
        statement = (select(GuardianLink)
                     .where(or_(GuardianLink.guardian_email == email, GuardianLink.minor_email == email))
                     .order_by(GuardianLink.id))
        return list(self.session.exec(statement).all())

    def list_all(self) -> list[GuardianLink]:
        return list(self.session.exec(select(GuardianLink).order_by(GuardianLink.id)).all())

    def is_active_guardian(self, guardian_email: str, minor_email: str) -> bool:
        link = self.get_by_key(guardian_email, minor_email)
        return bool(link and link.status == GuardianStatus.ACTIVE.value)

    def update(self, link: GuardianLink) -> GuardianLink:
        self.session.add(link)
        self.session.commit()
        self.session.refresh(link)
        return link

    def delete(self, link_id: int) -> bool:
        link = self.get_by_id(link_id)
        if link:
            self.session.delete(link)
            self.session.commit()
            return True
        return False
