"""
Core modules of the budget dashboard.

This package contains:
- aggregation: Expense/income totals per account group and account
- classify: Income/expense classification by account prefix
- config: Application configuration and settings
- exceptions: Custom exception classes
- exporters: Excel export functionality
- filters: Year, super-group and group filters
- logger: Logging configuration
- numbers: German amount parsing and formatting
- overview: Ledger-wide totals
- parsing: Ledger JSON to Transaction rows
- schema: Pydantic models
- source: Loading the ledger from file or URL
"""
