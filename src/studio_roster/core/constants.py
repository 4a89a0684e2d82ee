"""Constants and defaults.

Note: Keep constants here to avoid magic values spread across code.
"""

from .enums import TimeSlot

# Used by the task form until products are managed in the database.
DEFAULT_PRODUCT_CATEGORIES = (
    "Nước hoa",
    "Quần áo",
    "Rong biển",
    "Mỹ phẩm",
    "Phụ kiện",
    "Thực phẩm",
    "Khác",
)

DEFAULT_TIME_SLOT = TimeSlot.AFTERNOON

# Week grid columns, Monday first. Values follow 0 = Sunday.
DAYS_OF_WEEK = (
    (1, "T2"),
    (2, "T3"),
    (3, "T4"),
    (4, "T5"),
    (5, "T6"),
    (6, "T7"),
    (0, "CN"),
)

FILTER_ALL = "all"
MIN_PASSWORD_LENGTH = 6
