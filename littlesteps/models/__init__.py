from littlesteps.models.event import Event, EventType
from littlesteps.models.family import Family
from littlesteps.models.profile import Gender, Profile

__all__ = [
    "Event",
    "EventType",
    "Family",
    "Gender",
    "Profile",
]
