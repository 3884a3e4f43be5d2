"""Protocol constants for issue pool pricing."""

# Pool type tags as served by the pool subgraph
PRIMARY_ISSUE_POOL_TYPE = "PrimaryIssue"
SECONDARY_ISSUE_POOL_TYPE = "SecondaryIssue"

# Fraction of a pool balance the router may move in a single swap (0.3, 18 decimals)
MAX_SWAP_RATIO_WEI = 3 * 10**17

# Fixed-point precision of the settlement contracts
FIXED_POINT_DECIMALS = 18
