"""
Gameplay core - difficulty, tacos, search results.
NO UI DEPENDENCIES.
"""
