"""Routing: ordered table of regex routes, first pattern match wins.

Routes are registered during setup and frozen when the app starts
serving.
"""
