"""Find Azure key vaults after a device-code sign-in."""

__version__ = "0.1.0"
