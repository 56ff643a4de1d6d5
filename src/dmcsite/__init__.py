"""dmcsite — assembles the dmcView project website from static fragments."""

__version__ = "0.1.0"
