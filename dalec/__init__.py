"""Package spec model and generators for Debian and RPM packaging file contents."""

__version__ = "0.1.0"