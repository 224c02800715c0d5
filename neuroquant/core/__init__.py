"""Domain core: enums, exceptions, models and utilities."""
