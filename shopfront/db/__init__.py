"""SQLAlchemy persistence for shopfront's local state."""
