# models.py
from contextlib import contextmanager

from sqlalchemy import create_engine, Column, Integer, String
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

Base = declarative_base()

# Largest value a SQLite INTEGER can hold; larger ids can never be stored
MAX_GUESTID = 2**63 - 1


def _storable(guestid):
    return guestid <= MAX_GUESTID


class Guest(Base):
    __tablename__ = 'guests'
    # INTEGER PRIMARY KEY on SQLite: aliases rowid, so omitted ids are auto-assigned
    guestid = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    email = Column(String, nullable=True)
    address = Column(String, nullable=True)

    def __repr__(self):
        return f"<Guest(guestid={self.guestid}, name='{self.name}', phone='{self.phone}', email='{self.email}')>"

    def to_dict(self):
        return {
            'guestid': self.guestid,
            'name': self.name,
            'phone': self.phone,
            'email': self.email,
            'address': self.address,
        }


def _make_engine(db_uri):
    if db_uri in ('sqlite://', 'sqlite:///:memory:'):
        # one shared connection, otherwise every session sees an empty database
        return create_engine(db_uri, connect_args={'check_same_thread': False}, poolclass=StaticPool)
    if db_uri.startswith('sqlite'):
        return create_engine(db_uri, connect_args={'check_same_thread': False})
    return create_engine(db_uri)


class GuestStore:
    """Datastore client for the guests table.

    Owns the engine and session factory. Build one per application (or per
    test) and hand it to whatever needs database access.
    """

    def __init__(self, db_uri):
        self.db_uri = db_uri
        self.engine = _make_engine(db_uri)
        Base.metadata.create_all(self.engine)  # CREATE TABLE IF NOT EXISTS
        self._SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    @contextmanager
    def get_db_session(self):
        """Yields a new session, rolled back on error and always closed."""
        session = self._SessionLocal()
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def list_guests(self):
        with self.get_db_session() as session:
            guests = session.query(Guest).order_by(Guest.guestid).all()
            return [g.to_dict() for g in guests]

    def get_guest(self, guestid):
        if not _storable(guestid):
            return None
        with self.get_db_session() as session:
            guest = session.get(Guest, guestid)
            return guest.to_dict() if guest else None

    def create_guest(self, name, phone=None, email=None, address=None, guestid=None):
        """Inserts a guest and returns the stored record.

        With guestid=None SQLite assigns the next rowid. A guestid that is
        already taken raises sqlalchemy.exc.IntegrityError.
        """
        with self.get_db_session() as session:
            guest = Guest(guestid=guestid, name=name, phone=phone, email=email, address=address)
            session.add(guest)
            session.flush()
            new_id = guestid if guestid is not None else guest.guestid
            session.commit()

        return self.get_guest(new_id)

    def replace_guest(self, guestid, name, phone=None, email=None, address=None):
        """Overwrites every mutable field. Returns None if the guest is gone."""
        if not _storable(guestid):
            return None
        with self.get_db_session() as session:
            updated = session.query(Guest).filter_by(guestid=guestid).update(
                {'name': name, 'phone': phone, 'email': email, 'address': address},
                synchronize_session=False,
            )
            session.commit()

        if updated == 0:
            return None
        return self.get_guest(guestid)

    def delete_guest(self, guestid):
        """Returns the number of rows removed (0 or 1)."""
        if not _storable(guestid):
            return 0
        with self.get_db_session() as session:
            deleted = session.query(Guest).filter_by(guestid=guestid).delete(synchronize_session=False)
            session.commit()
            return deleted

    def dispose(self):
        self.engine.dispose()
