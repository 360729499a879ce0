"""Routing — pattern matching, specificity ordering, and dispatch.

Routes are registered during setup into a table that stays sorted by
specificity; the router walks that table for every request.
"""
