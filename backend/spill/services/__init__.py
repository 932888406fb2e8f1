"""Domain services: credentials and leaderboard.

Services receive the database session from their caller, keeping transport
concerns in the blueprints and making them usable against any bound engine.
"""
