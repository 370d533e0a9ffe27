"""Subscription tiers."""

from enum import StrEnum

from tenantauth.domain.value_objects.vocabulary import parse_member


class SubscriptionTier(StrEnum):
    """Ordered subscription tiers: free < premium < enterprise."""

    FREE = "free"
    PREMIUM = "premium"
    ENTERPRISE = "enterprise"

    @property
    def level(self) -> int:
        return _TIER_LEVELS[self]

    @classmethod
    def parse(cls, value: object) -> "SubscriptionTier":
        return parse_member(cls, value, "subscription tier")


_TIER_LEVELS = {
    SubscriptionTier.FREE: 1,
    SubscriptionTier.PREMIUM: 2,
    SubscriptionTier.ENTERPRISE: 3,
}
