"""Infrastructure layer: database wiring, logging and SQLAlchemy repositories."""
