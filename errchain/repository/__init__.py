"""Repository layer: stubbed data access (in-memory fixtures, no real DB).

Functions here never decide whether "no rows" matters; they annotate the
failure with the query and raise, leaving the decision to services.
"""
