"""
Reference strategies for Automail.

Mail pool, robot behaviours and routing policies used by the default
simulation engine. Any implementation of the interfaces in
``automail.core.interfaces`` can replace them.
"""

from automail.strategies.mail_pool import MailPool
from automail.strategies.behaviour import StandardBehaviour, PriorityAwareBehaviour
from automail.strategies.routing import TopOfStorageRouting, LightestFirstRouting

__all__ = [
    "MailPool",
    "StandardBehaviour",
    "PriorityAwareBehaviour",
    "TopOfStorageRouting",
    "LightestFirstRouting",
]
