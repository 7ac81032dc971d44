"""Messaging use cases"""
from .send_message import SendMessage

__all__ = ["SendMessage"]
