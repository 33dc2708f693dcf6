"""Application package for the Gym Planner backend.

This package exposes the app factory, service, repository and model
modules used by the FastAPI application. Individual modules contain the
concrete implementations and documentation.
"""
