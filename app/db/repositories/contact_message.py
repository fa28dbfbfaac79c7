"""
Contact message repository.
"""

from typing import Optional

from sqlmodel import Session, select

from app.models.contact_message import ContactMessage


class ContactMessageRepository:
    """Repository for ContactMessage database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, message: ContactMessage) -> ContactMessage:
        self.session.add(message)
        self.session.commit()
        self.session.refresh(message)
        return message

    def get_by_id(self, message_id: int) -> Optional[ContactMessage]:
        return self.session.get(ContactMessage, message_id)

    def filter(self, status: Optional[str] = None, type: Optional[str] = None) -> list[ContactMessage]:
        statement = select(ContactMessage)
        if status:
            statement = statement.where(ContactMessage.status == status)
        if type:
            statement = statement.where(ContactMessage.type == type)
        statement = statement.order_by(ContactMessage.created_at.desc(), ContactMessage.id.desc())
        return list(self.session.exec(statement).all())

    def update(self, message: ContactMessage) -> ContactMessage:
        self.session.add(message)
        self.session.commit()
        self.session.refresh(message)
        return message

    def delete(self, message_id: int) -> bool:
        message = self.get_by_id(message_id)
        if message:
            self.session.delete(message)
            self.session.commit()
            return True
        return False
