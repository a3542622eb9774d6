import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    status_code = 404


class LockedError(ServiceError):
    status_code = 403


class ConflictError(ServiceError):
    status_code = 409


class PersistenceError(ServiceError):
    status_code = 500


def commit(db: Session, failure_message: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(failure_message)
        raise PersistenceError(f"Something went wrong: {failure_message.lower()}.")
