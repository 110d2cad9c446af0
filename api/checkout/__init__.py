"""
Order checkout and bronze-plan subscriptions.
"""
