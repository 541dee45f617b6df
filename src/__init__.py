"""
Vitrine - Backend d'agrégation pour site personnel.

Ce package agrège plusieurs API tierces (Hevy, Last.fm, Trakt, TMDB) derrière
des opérations mises en cache, et fournit un outil de surveillance des listings
CSFloat via des proxies rotatifs.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entités, ports, erreurs)
- services/ : Couche application (agrégations, calcul de remise)
- adapters/ : Couche infrastructure (CLI, clients API, stockage, marché)
- web/ : Surface HTTP des opérations (FastAPI)
"""
