"""FastAPI application and REST API endpoints.

This module contains:
- Main FastAPI application configuration
- Bearer token authentication
- Travel story and account endpoints
"""
