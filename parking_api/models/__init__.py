# Parking Management API — Database Models
# Import all models here for SQLAlchemy discovery

from parking_api.models.user import User, Role                 # noqa
from parking_api.models.parking import Parking                 # noqa
from parking_api.models.entry import Entry                     # noqa
from parking_api.models.activity_log import ActivityLog        # noqa
