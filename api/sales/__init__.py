"""
Admin views over sales and subscriptions: listing, refunds, cancellations.
"""
