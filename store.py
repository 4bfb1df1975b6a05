# store.py
import logging

from models import User

logger = logging.getLogger(__name__)


class UserNotFound(Exception):
    def __init__(self, user_id):
        self.user_id = user_id
        super().__init__(f"User {user_id} not found")


class UserStore:
    """Storage client for User rows.

    Built once per process around a session factory and handed to request
    handlers, so tests can swap in a double. Each method opens its own session.
    A write that matches no row returns a count of 0 instead of raising.
    """

    def __init__(self, session_factory):
        self._session_factory = session_factory

    def list_users(self):
        with self._session_factory() as db:
            return db.query(User).order_by(User.id).all()

    def get_user(self, user_id):
        if user_id is None:
            return None
        with self._session_factory() as db:
            return db.get(User, user_id)

    def create_user(self, fields):
        with self._session_factory() as db:
            try:
                user = User(**fields)
                db.add(user)
                db.commit()
                db.refresh(user)
            except Exception:
                db.rollback()
                raise
        logger.info(f"Created user {user.id}")
        return user

    def update_user(self, user_id, fields):
        """Apply `fields` to the matching row and return the number of rows matched."""
        if user_id is None:
            return 0
        with self._session_factory() as db:
            query = db.query(User).filter(User.id == user_id)
            if not fields:
                return query.count()
            try:
                matched = query.update(fields, synchronize_session=False)
                db.commit()
            except Exception:
                db.rollback()
                raise
        return matched

    def delete_user(self, user_id):
        if user_id is None:
            return 0
        with self._session_factory() as db:
            try:
                deleted = db.query(User).filter(User.id == user_id).delete(synchronize_session=False)
                db.commit()
            except Exception:
                db.rollback()
                raise
        if deleted:
            logger.info(f"Deleted user {user_id}")
        return deleted
