"""DChart - data to chart geometry on a 0-100 canvas."""

__version__ = "1.0.0"
