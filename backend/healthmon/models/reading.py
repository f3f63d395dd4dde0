"""
Blood Pressure Reading model.
"""
from datetime import datetime
from healthmon import db

READING_FIELDS = ('input_date', 'input_time', 'systolic', 'diastolic', 'pulse_rate')


class BloodPressureReading(db.Model):
    """
    One blood pressure measurement owned by a user.
    Date and time of the observation are kept apart, as entered by the user.
    """
    __tablename__ = 'high_bp'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)

    # Observation
    input_date = db.Column(db.Date, nullable=False)
    input_time = db.Column(db.Time, nullable=False)

    # Blood pressure values
    systolic = db.Column(db.Integer, nullable=False)
    diastolic = db.Column(db.Integer, nullable=False)
    pulse_rate = db.Column(db.Integer, nullable=False)

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=True)

    def to_dict(self, iso_date=True):
        """Convert to dictionary.

        With ``iso_date=False`` the observation date is handed to the JSON
        provider as a ``date`` object instead of a ``YYYY-MM-DD`` string.
        """
        return {
            'id': self.id,
            'user_id': self.user_id,
            'input_date': self.input_date.isoformat() if iso_date and self.input_date else self.input_date,
            'input_time': self.input_time.isoformat() if self.input_time else None,
            'systolic': self.systolic,
            'diastolic': self.diastolic,
            'pulse_rate': self.pulse_rate,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f'<BloodPressureReading {self.id}: {self.systolic}/{self.diastolic}>'
