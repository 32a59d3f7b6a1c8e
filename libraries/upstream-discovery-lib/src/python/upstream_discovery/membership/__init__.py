from .membership_events import MembershipEvents, MembershipSubscription
from .upstream_registry import UpstreamRegistry

__all__ = [
    "MembershipEvents",
    "MembershipSubscription",
    "UpstreamRegistry",
]
