"""
Couche infrastructure : persistance des fiches et de l'annuaire des genres.
"""
