"""E-mail notifications sent on booking events."""
