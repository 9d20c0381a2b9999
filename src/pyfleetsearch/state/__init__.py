"""State layer.

This package owns the overlay state (open or closed, query text, kind
filter) and the input events and keyboard subscriptions that drive it.
"""
