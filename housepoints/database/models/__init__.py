from .week import Week
from .house import House
from .school_class import SchoolClass
from .term import Term
from .point_entry import AwardCategory, PointEntry

__all__ = [
    "Week",
    "House",
    "SchoolClass",
    "Term",
    "AwardCategory",
    "PointEntry",
]
