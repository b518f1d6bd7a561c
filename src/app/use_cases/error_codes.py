"""Error codes carried by failed use case Results

Callers branch on these (e.g. finance workflows tell "no budget" apart
from "over budget"); the API maps them to HTTP statuses.
"""

# Budget ledger
NO_BUDGET_DEFINED = "NO_BUDGET_DEFINED"
BUDGET_EXCEEDED = "BUDGET_EXCEEDED"
CONCURRENCY_CONFLICT = "CONCURRENCY_CONFLICT"
PAYMENT_NOT_FOUND = "PAYMENT_NOT_FOUND"
INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"
POST_PAYMENT_FAILED = "POST_PAYMENT_FAILED"
UPDATE_PAYMENT_STATUS_FAILED = "UPDATE_PAYMENT_STATUS_FAILED"
RECONCILIATION_FAILED = "RECONCILIATION_FAILED"

# Audit trail
BENEFICIARY_NOT_FOUND = "BENEFICIARY_NOT_FOUND"
UPDATE_BENEFICIARY_FAILED = "UPDATE_BENEFICIARY_FAILED"

# Aggregates
AGGREGATE_REBUILD_FAILED = "AGGREGATE_REBUILD_FAILED"

# Region-gated reads
ROUND_NOT_FOUND = "ROUND_NOT_FOUND"
