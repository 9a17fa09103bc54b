"""Farm Boy schedule -> iCalendar feed."""

__version__ = "1.0.0"
