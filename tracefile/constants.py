"""Markers and sentinels of the lcov tracefile format."""
from __future__ import annotations

SF_MARKER = "SF:"
FN_MARKER = "FN:"
FNDA_MARKER = "FNDA:"
FNF_MARKER = "FNF:"
FNH_MARKER = "FNH:"
BRDA_MARKER = "BRDA:"
BA_MARKER = "BA:"
BRF_MARKER = "BRF:"
BRH_MARKER = "BRH:"
DA_MARKER = "DA:"
LH_MARKER = "LH:"
LF_MARKER = "LF:"
END_OF_RECORD_MARKER = "end_of_record"

DELIMITER = ","
NEWLINE = "\n"

# BRDA token for a branch whose block was never executed.
NOT_TAKEN = "-"

# BA tokens: 0 = not executed, 1 = executed but not taken, 2 = executed and taken.
BA_NOT_EXECUTED = "0"
BA_TAKEN = "2"
