"""
Widget catalog and payment intents.
"""
