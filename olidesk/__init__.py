"""Olidesk API: clients, service forms and technicians behind a JWT gate."""

__version__ = "1.0.0"
