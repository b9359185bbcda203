from app.models.user import User
from app.models.country import Country, City
from app.models.facility import Facility
from app.models.photo import Photo
from app.models.booking import Booking

# This makes the models directory a Python package and ensures all models are loaded
