"""
Couche adaptateurs (infrastructure).

Les adaptateurs implémentent les ports définis dans core/ports/ et fournissent
des implémentations concrètes pour les systèmes externes.

Sous-packages :
- api/ : Clients des API tierces (Hevy, Last.fm, Trakt, TMDB), cache TTL,
  pagination, refresh OAuth et enrichissement par lots
- market/ : Fetch des listings CSFloat avec basculement sur les proxies
- persistence/ : Stockage des jetons OAuth (diskcache ou Directus)
- cli/ : Interface ligne de commande (Typer)

Chaque adaptateur dépend de core/ mais core/ ne dépend jamais des adaptateurs.
"""
