"""
Contact message service (public submit, admin inbox).
"""

import datetime
import logging
from typing import Optional

from fastapi import HTTPException, status
from sqlmodel import Session

from app.db.repositories.contact_message import ContactMessageRepository
from app.models.contact_message import ContactMessage
from app.schemas.contact import ContactMessageCreate

logger = logging.getLogger(__name__)


class ContactService:

    def __init__(self, session: Session):
        self.repository = ContactMessageRepository(session)

    def submit(self, data: ContactMessageCreate) -> ContactMessage:
        message = self.repository.create(ContactMessage(**data.model_dump()))
        logger.info("Contact message %s received (%s)", message.id, message.type)
        return message

    def list_messages(self, status_filter: Optional[str] = None, type_filter: Optional[str] = None,
                      ) -> list[ContactMessage]:
        return self.repository.filter(status=status_filter, type=type_filter)

    def get(self, message_id: int) -> ContactMessage:
        message = self.repository.get_by_id(message_id)
        if not message:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Message not found")
        return message

    def set_status(self, message_id: int, new_status: str) -> ContactMessage:
        # any status may follow any other
        message = self.get(message_id)
        message.status = new_status
        message.updated_at = datetime.datetime.utcnow()
        return self.repository.update(message)

    def delete(self, message_id: int) -> None:
        self.get(message_id)
        self.repository.delete(message_id)
