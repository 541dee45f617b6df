"""
Mock Trakt and TMDB API responses for testing.
"""

# GET /users/me/history?page=1&limit=10
TRAKT_HISTORY = [
    {
        "id": 9001,
        "watched_at": "2024-03-11T21:00:00.000Z",
        "action": "watch",
        "type": "episode",
        "episode": {"season": 1, "number": 3, "title": "Cripples, Bastards, and Broken Things",
                    "ids": {"trakt": 73, "tmdb": 63058}},
        "show": {"title": "Game of Thrones", "year": 2011,
                 "ids": {"trakt": 1390, "slug": "game-of-thrones", "tmdb": 1399}},
    },
    {
        "id": 9000,
        "watched_at": "2024-03-10T21:00:00.000Z",
        "action": "watch",
        "type": "episode",
        "episode": {"season": 1, "number": 2, "title": "The Kingsroad",
                    "ids": {"trakt": 72, "tmdb": 63057}},
        "show": {"title": "Game of Thrones", "year": 2011,
                 "ids": {"trakt": 1390, "slug": "game-of-thrones", "tmdb": 1399}},
    },
    {
        "id": 8999,
        "watched_at": "2024-03-09T20:00:00.000Z",
        "action": "scrobble",
        "type": "movie",
        "movie": {"title": "Inception", "year": 2010,
                  "ids": {"trakt": 16662, "slug": "inception-2010", "imdb": "tt1375666", "tmdb": 27205}},
    },
]

# GET /users/me/stats
TRAKT_STATS = {
    "movies": {"plays": 155, "watched": 114, "minutes": 15650, "collected": 933},
    "shows": {"watched": 16, "collected": 7},
    "seasons": {"ratings": 6},
    "episodes": {"plays": 552, "watched": 534, "minutes": 17330},
}

# POST /oauth/token
TRAKT_TOKEN_RESPONSE = {
    "access_token": "new-access-token",
    "token_type": "bearer",
    "expires_in": 7776000,
    "refresh_token": "new-refresh-token",
    "scope": "public",
    "created_at": 1710172800,
}

# GET /3/tv/1399/season/1
TMDB_SEASON_RESPONSE = {"id": 3624, "season_number": 1, "poster_path": "/wgfKiqzuMrFIkU1M68DDDY8kGC1.jpg"}

# GET /3/movie/27205
TMDB_MOVIE_RESPONSE = {"id": 27205, "title": "Inception", "poster_path": "/oYuLEt3zVCKq57qu2F8dT7NIa6f.jpg"}

# GET /3/tv/1399
TMDB_SHOW_RESPONSE = {"id": 1399, "name": "Game of Thrones", "poster_path": "/1XS1oqL89opfnbLl8WnZY1O1uJx.jpg"}
