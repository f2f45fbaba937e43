"""crudcore: generic data-access and business-logic scaffolding for CRUD backends."""

__version__ = "0.1.0"
