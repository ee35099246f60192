"""Database models."""

from siteadmin.models.log import Log
from siteadmin.models.message import Message
from siteadmin.models.user import User
from siteadmin.models.visitor import Visitor

__all__ = [
    "Log",
    "Message",
    "User",
    "Visitor",
]
