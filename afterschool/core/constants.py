"""Application-wide constants for the after-school booking API."""

from __future__ import annotations

BRAND_NAME = "AfterSchool"
API_TITLE = f"{BRAND_NAME} Lessons API"
API_VERSION = "1.0.0"
API_DESCRIPTION = "Lesson inventory, search and order placement for after-school classes."

# Order validation
NAME_PATTERN = r"^[A-Za-z\s]+$"
PHONE_PATTERN = r"^\d+$"

# Lesson fields a client may overwrite through PUT /lessons/{id}
LESSON_UPDATABLE_FIELDS = frozenset({"subject", "location", "price", "space", "icon"})

# Range of a 64-bit signed INTEGER column
INTEGER_COLUMN_MIN = -(2**63)
INTEGER_COLUMN_MAX = 2**63 - 1

# Maintenance defaults
DEFAULT_RESTOCK_SPACES = 5

SAMPLE_LESSONS = [
    {"subject": "Mathematics", "location": "London", "price": 100, "space": 5, "icon": "fa-calculator"},
    {"subject": "English Literature", "location": "Manchester", "price": 90, "space": 8, "icon": "fa-book"},
    {"subject": "Science", "location": "London", "price": 110, "space": 3, "icon": "fa-flask"},
    {"subject": "Art & Design", "location": "Birmingham", "price": 85, "space": 10, "icon": "fa-palette"},
    {"subject": "Music", "location": "London", "price": 95, "space": 6, "icon": "fa-music"},
    {"subject": "Physical Education", "location": "Leeds", "price": 75, "space": 12, "icon": "fa-football-ball"},
    {"subject": "Computer Science", "location": "Manchester", "price": 120, "space": 4, "icon": "fa-laptop-code"},
    {"subject": "History", "location": "Birmingham", "price": 80, "space": 7, "icon": "fa-landmark"},
    {"subject": "Geography", "location": "London", "price": 85, "space": 9, "icon": "fa-globe"},
    {"subject": "French Language", "location": "Manchester", "price": 95, "space": 5, "icon": "fa-language"},
    {"subject": "Drama", "location": "Leeds", "price": 88, "space": 6, "icon": "fa-theater-masks"},
    {"subject": "Cooking", "location": "London", "price": 105, "space": 4, "icon": "fa-utensils"},
]
