"""Notifications domain module - publish/subscribe for catalog events"""

from .port import SubscriberPort
from .hub import NotificationHub
from .subscribers import LoanActivitySubscriber, StatisticsSubscriber

__all__ = [
    "SubscriberPort",
    "NotificationHub",
    "LoanActivitySubscriber",
    "StatisticsSubscriber",
]
