"""Concrete adapters for the interfaces defined in :mod:`akashic.interfaces`."""
