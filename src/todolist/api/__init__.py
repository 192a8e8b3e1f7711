"""
API module - FastAPI application serving TodoService.
"""
from .main import create_app

__all__ = ["create_app"]
