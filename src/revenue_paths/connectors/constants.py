"""Column positions of the pipeline spreadsheet export."""

# Identity
ACCOUNT = 0
NAME = 1

# Deal economics
VALUE = 2
P_WIN = 3
START_DATE = 4

# Priority flags
TOP_PRIORITY = 5
PORTFOLIO_PRIORITY = 6

# Quarterly revenue (column 7 is factored revenue, unused)
Q1 = 8
Q2 = 9
Q3 = 10
Q4 = 11

# Ownership & status
OWNER = 12
STAGE = 13
CLOSED = 14
PERIOD_MONTHS = 15
