"""
Routes package for the task service.

This package contains the route blueprint factory:
- api: HTTP endpoints for the task resource
"""
