"""
Survey Web Application.

Provides the Flask app for collecting and exporting survey responses.

Usage:
    survey-responses serve
"""
from .app import create_app

__all__ = ["create_app"]
