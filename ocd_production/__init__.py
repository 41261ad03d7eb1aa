"""Extract monthly well production from OCD wcproduction XML archives."""

__version__ = "0.1.0"
