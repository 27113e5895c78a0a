from venue_platform.models.user import User
from venue_platform.models.venue import Venue
from venue_platform.models.appointment import Appointment
from venue_platform.models.blog import Blog
from venue_platform.models.partner import Partner
from venue_platform.models.review import Review
from venue_platform.models.contact import Contact

__all__ = ["User", "Venue", "Appointment", "Blog", "Partner", "Review", "Contact"]
