"""Studio Roster package.

Scheduling and attendance tracking for a small livestream / video / event team.
Organized by feature modules (staff, products, sessions, availability, reports,
users) with a thin Flask controller layer and service/repository layers.
"""

__version__ = "0.1.0"
