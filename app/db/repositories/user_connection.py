"""
User connection repository.
"""

from typing import Optional

from sqlmodel import Session, select

from app.models.user_connection import UserConnection


class UserConnectionRepository:
    """Repository for UserConnection database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, connection: UserConnection) -> UserConnection:
        self.session.add(connection)
        self.session.commit()
        self.session.refresh(connection)
        return connection

    def get_by_id(self, connection_id: int) -> Optional[UserConnection]:
        return self.session.get(UserConnection, connection_id)

    def get_by_key(self, from_email: str, to_email: str, connection_type: str) -> Optional[UserConnection]:
        statement = select(UserConnection).where(UserConnection.from_user_email == from_email.lower(),
                                                 UserConnection.to_user_email == to_email.lower(),
                                                 UserConnection.connection_type == connection_type, )
        return self.session.exec(statement).first()

    def filter(self, from_user_email: Optional[str] = None, to_user_email: Optional[str] = None,
               status: Optional[str] = None, connection_type: Optional[str] = None, ) -> list[UserConnection]:
        statement = select(UserConnection)
        if from_user_email:
            statement = statement.where(UserConnection.from_user_email == from_user_email.lower())
        if to_user_email:
            statement = statement.where(UserConnection.to_user_email == to_user_email.lower())
        if status:
            statement = statement.where(UserConnection.status == status.lower())
        if connection_type:
            statement = statement.where(UserConnection.connection_type == connection_type)
        return list(self.session.exec(statement.order_by(UserConnection.id)).all())

    def update(self, connection: UserConnection) -> UserConnection:
        self.session.add(connection)
        self.session.commit()
        self.session.refresh(connection)
        return connection

    def delete(self, connection_id: int) -> bool:
        connection = self.get_by_id(connection_id)
        if connection:
            self.session.delete(connection)
            self.session.commit()
            return True
        return False
