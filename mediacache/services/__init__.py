"""
Couche application (cas d'utilisation, orchestration).

- upstream_resolver : desambiguisation film/serie par interrogation ordonnee
- genre_directory : annuaire des genres avec sa propre politique de fraicheur
- resolution : coordinateur de resolution (cache, fraicheur, single-flight)
- views : vues en lecture composees a partir du coordinateur et du catalogue
- embed : construction des URLs du lecteur integre
"""
