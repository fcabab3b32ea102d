"""Catalog services: movies, series, projects, reference data and users.

Import services from their modules, e.g.
``from src.services.catalog.movie_service import MovieService``.
"""
