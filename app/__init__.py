"""
HTTP layer of the budget dashboard.
"""
