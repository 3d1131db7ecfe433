"""Market identifiers and fixed-point constants."""

# Market symbols
USDC = "USDC"
DAI = "DAI"
ETH = "ETH"

# Mantissa (1e18): fixed-point unit for rates and utilization
SCALE = 10**18

# Working width for intermediate arithmetic (uint256)
UINT256_MAX = 2**256 - 1

# One accrual step per 15-second block, 365-day year
SECONDS_PER_STEP = 15
STEPS_PER_YEAR = 365 * 24 * 3600 // SECONDS_PER_STEP  # 2_102_400
