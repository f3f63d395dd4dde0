from .user import User
from .reading import BloodPressureReading

# Upper bound of the INTEGER primary keys
MAX_ID = 2 ** 31 - 1

__all__ = ['User', 'BloodPressureReading', 'MAX_ID']
