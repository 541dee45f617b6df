"""
Couche domaine (core).

Contient les entités métier, ports (interfaces abstraites) et exceptions.
Cette couche n'a AUCUNE dépendance vers l'infrastructure (adapters, frameworks, HTTP).

Sous-packages :
- entities/ : Entités métier (Credentials, ProxyConfig, FetchResult...)
- ports/ : Interfaces abstraites définissant les contrats pour les adaptateurs
- errors : Taxonomie des erreurs d'agrégation
"""
