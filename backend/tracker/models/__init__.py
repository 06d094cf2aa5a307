# tracker/models/__init__.py
"""
Central model registry.

Import this once at startup (e.g., in main.py) so SQLAlchemy sees all mapped
classes before relationships are resolved.
"""
from tracker.db import Base  # noqa: F401  re-export Base

from .month_record import MonthRecord  # noqa: F401
from .product import Product, ProductCategory, ProductStatus  # noqa: F401
from .user import User, UserRole  # noqa: F401
from .game_name import GameName  # noqa: F401
from .task import Task, TaskStatus  # noqa: F401
