"""Configuration classes for flowmatch components."""

from dataclasses import dataclass


@dataclass
class SolverConfig:
    """Configuration for the max-flow driver and the problem adapters."""

    # Run capacity and conservation checks after every max-flow computation
    verify_flow: bool = False

    # Sink capacity for items that do not belong to any quota group
    ungrouped_item_quota: int = 1

    # Capacity of the source edge feeding each requester
    requester_capacity: int = 1


# Global configuration instance
SOLVER_CONFIG = SolverConfig()
