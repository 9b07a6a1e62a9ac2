# Routes package __init__.py - re-exports routers for main.py convenience
from .tools import router as tools_router

__all__ = ['tools_router']
