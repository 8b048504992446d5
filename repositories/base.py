from contextlib import contextmanager


class BaseRepository:
    """Base repository with session management"""

    def __init__(self, session):
        self.session = session

    @classmethod
    @contextmanager
    def transaction(cls, session_factory):
        """Context manager for transactional operations"""
        session = session_factory()
        try:
            yield cls(session)
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
