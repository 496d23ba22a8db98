"""Read-only HTTP diagnostics surface for audit ledgers."""
