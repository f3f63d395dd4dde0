"""
User model.
"""
from datetime import datetime
from healthmon import db

PROFILE_FIELDS = ('full_name', 'age', 'gender', 'height', 'weight', 'ongoing_med')


class User(db.Model):
    """
    Registered user of the health monitoring app.
    The password column only ever holds a bcrypt hash.
    """
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(100), nullable=False, unique=True)
    email = db.Column(db.String(255), nullable=False, unique=True)
    password = db.Column(db.String(255), nullable=False)

    # Profile fields, filled in after sign-up
    full_name = db.Column(db.String(200), nullable=True)
    age = db.Column(db.Integer, nullable=True)
    gender = db.Column(db.String(50), nullable=True)
    height = db.Column(db.Float, nullable=True)
    weight = db.Column(db.Float, nullable=True)
    ongoing_med = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def profile_dict(self):
        return {field: getattr(self, field) for field in PROFILE_FIELDS}

    def to_dict(self):
        """Public representation. The password hash is never included."""
        data = {
            'id': self.id,
            'username': self.username,
            'email': self.email,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
        data.update(self.profile_dict())
        return data

    def token_claims(self):
        return {'id': self.id, 'username': self.username, 'email': self.email}

    def __repr__(self):
        return f'<User {self.id}>'
