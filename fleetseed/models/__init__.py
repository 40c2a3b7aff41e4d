# FleetSeed Database Models
# Import all models here for SQLAlchemy discovery

# users database
from fleetseed.models.user import User                 # noqa
from fleetseed.models.operator import Operator         # noqa
from fleetseed.models.customer import Customer         # noqa
# main database
from fleetseed.models.fleet import Fleet, FleetAssociation                # noqa
from fleetseed.models.lock import Lock                                    # noqa
from fleetseed.models.bike import Bike                                    # noqa
from fleetseed.models.maintenance import Maintenance                      # noqa
from fleetseed.models.trip import Trip                                    # noqa
from fleetseed.models.incident import Theft, Crash                        # noqa
from fleetseed.models.geofence import GeofenceCircle, GeofencePolygon, Hub  # noqa
from fleetseed.models.parking import ParkingArea, ParkingSpot             # noqa
