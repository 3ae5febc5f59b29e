"""Job Application Tracker: a local record of job applications."""

__version__ = "0.1.0"
