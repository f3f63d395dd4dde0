"""
Record store access for users and blood pressure readings.

Every user-scoped mutation loads the referenced row with ``FOR UPDATE``
and mutates it in the same transaction, so the existence check cannot go
stale before the write. Sessions are scoped to the app context and removed
at teardown, which returns the connection to the pool on every exit path.
"""
from datetime import datetime
from sqlalchemy import or_, text
from sqlalchemy.exc import IntegrityError
from healthmon.models import User, BloodPressureReading, MAX_ID
from healthmon.models.user import PROFILE_FIELDS
from healthmon.models.reading import READING_FIELDS


class DuplicateUserError(Exception):
    """Raised when a username or email is already registered."""


def _out_of_range(ident):
    """Ids the INTEGER columns cannot hold never match a row."""
    return ident > MAX_ID


class RecordStore:
    """Query layer over the Flask-SQLAlchemy session."""

    def __init__(self, db):
        self.db = db

    @property
    def session(self):
        return self.db.session

    # ---------- Users ----------

    def find_user_by_login(self, username=None, email=None):
        """Return the first user matching the username or the email."""
        criteria = []
        if username:
            criteria.append(User.username == username)
        if email:
            criteria.append(User.email == email)
        if not criteria:
            return None
        return User.query.filter(or_(*criteria)).first()

    def add_user(self, username, email, password_hash):
        user = User(username=username, email=email, password=password_hash)
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError as exc:
            # Lost a race with a concurrent sign-up for the same name/email
            self.session.rollback()
            raise DuplicateUserError(username) from exc
        return user

    def get_user(self, user_id):
        if _out_of_range(user_id):
            return None
        return self.session.get(User, user_id)

    def update_profile(self, user_id, fields):
        """Replace the profile fields of a user. Returns None if absent."""
        if _out_of_range(user_id):
            return None
        user = self.session.get(User, user_id, with_for_update=True)
        if user is None:
            self.session.rollback()
            return None

        for field in PROFILE_FIELDS:
            setattr(user, field, fields.get(field))

        self.session.commit()
        return user

    # ---------- Readings ----------

    def list_readings(self, user_id):
        if _out_of_range(user_id):
            return []
        return (BloodPressureReading.query
                .filter_by(user_id=user_id)
                .order_by(BloodPressureReading.input_date.desc(),
                          BloodPressureReading.input_time.desc(),
                          BloodPressureReading.id.desc())
                .all())

    def add_reading(self, user_id, fields):
        """Insert a reading for an existing user. Returns None if the user is absent."""
        if _out_of_range(user_id):
            return None
        user = self.session.get(User, user_id, with_for_update=True)
        if user is None:
            self.session.rollback()
            return None

        reading = BloodPressureReading(user_id=user.id)
        for field in READING_FIELDS:
            setattr(reading, field, fields.get(field))

        self.session.add(reading)
        self.session.commit()
        return reading

    def update_reading(self, reading_id, fields):
        if _out_of_range(reading_id):
            return None
        reading = self.session.get(BloodPressureReading, reading_id, with_for_update=True)
        if reading is None:
            self.session.rollback()
            return None

        for field in READING_FIELDS:
            setattr(reading, field, fields.get(field))
        reading.updated_at = datetime.utcnow()

        self.session.commit()
        return reading

    def delete_reading(self, reading_id):
        """Delete a reading. Returns False if it does not exist."""
        if _out_of_range(reading_id):
            return False
        reading = self.session.get(BloodPressureReading, reading_id, with_for_update=True)
        if reading is None:
            self.session.rollback()
            return False

        self.session.delete(reading)
        self.session.commit()
        return True

    # ---------- Diagnostics ----------

    def database_version(self):
        """Version string reported by the database server."""
        with self.db.engine.connect() as conn:
            if conn.dialect.name == 'postgresql':
                return conn.execute(text('SELECT version()')).scalar()
            if conn.dialect.name == 'sqlite':
                return 'SQLite ' + conn.execute(text('SELECT sqlite_version()')).scalar()
            return '.'.join(str(part) for part in conn.dialect.server_version_info or ())
