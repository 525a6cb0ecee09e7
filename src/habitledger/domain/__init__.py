"""Domain contracts for the habit ledger."""
