"""CLI interface for clinicledger."""
