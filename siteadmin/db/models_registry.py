"""
Model registry.

Import all models here to ensure they are registered with SQLAlchemy metadata
before ``Base.metadata.create_all`` runs.
"""

from siteadmin.db.base import Base
from siteadmin.models.log import Log
from siteadmin.models.message import Message
from siteadmin.models.user import User
from siteadmin.models.visitor import Visitor

__all__ = [
    "Base",
    "Log",
    "Message",
    "User",
    "Visitor",
]
