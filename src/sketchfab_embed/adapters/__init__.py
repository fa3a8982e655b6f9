"""Concrete integrations for the ports defined in the core package."""
