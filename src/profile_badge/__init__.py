"""profile-badge: render a GitHub profile badge from a user's public activity."""

__version__ = "0.1.0"
