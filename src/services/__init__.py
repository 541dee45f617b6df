"""
Application services layer (use cases).

Services orchestrate upstream clients, caches and the credential store to
produce one composite result per logical request.

This layer contains:
- FitnessService: Hevy routines and workout statistics
- ScrobbleService: Last.fm recent tracks and account statistics
- WatchHistoryService: Trakt history and statistics, with TMDB posters
- discount: dynamic discount threshold and deal detection
"""
