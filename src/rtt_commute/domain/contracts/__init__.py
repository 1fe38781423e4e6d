"""Contracts (protocols) implemented by application services."""

from rtt_commute.domain.contracts.rollover_policy import RolloverPolicyProtocol

__all__ = ["RolloverPolicyProtocol"]
