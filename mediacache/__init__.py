"""
MediaCache - Proxy de cache devant l'API de metadonnees TMDB.

Ce package resout des identifiants de contenus en fiches enrichies
(titre, visuels, genres, note, date de sortie), les persiste et expose
des vues en lecture (accueil, tendances, recherche, details, liste).

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entites, ports, objets valeur, exceptions)
- services/ : Couche application (resolution, annuaire des genres, vues)
- adapters/ : Clients API externes (TMDB, flux catalogue)
- infrastructure/ : Persistance SQLModel
- web/ : API JSON FastAPI
"""

__version__ = "0.1.0"
