"""Pool type definitions.

Provides the AnyPool union type for use throughout the codebase.
"""

from typing import TypeAlias

from pricing.pools.primary_issue import PrimaryIssuePool
from pricing.pools.secondary_issue import SecondaryIssuePool

# Union type for all issue pool types
AnyPool: TypeAlias = PrimaryIssuePool | SecondaryIssuePool

__all__ = [
    "AnyPool",
    "PrimaryIssuePool",
    "SecondaryIssuePool",
]
