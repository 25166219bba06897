"""Security subsystem of asymcrypt."""
