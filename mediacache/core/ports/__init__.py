"""
Ports (interfaces abstraites) du domaine.

- api_clients : fournisseur de metadonnees et source du catalogue
- repositories : stockage des fiches et de l'annuaire des genres
"""
