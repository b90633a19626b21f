"""Framework layer: settings, exceptions, startup checks and shared types."""
