"""
Cache utilities for the First Goal application
Standings are cached per season and dropped whenever a game is (re)scored
"""

import functools

from flask import current_app

from firstgoal import cache


def standings_cache_key(season_id):
    return f"standings_season_{season_id}"


def cached_standings(f):
    """
    Cache a standings loader keyed by season id.

    The wrapped function must take the season id as its first argument and
    return a JSON-serialisable value.
    """

    @functools.wraps(f)
    def wrapped(season_id, *args, **kwargs):
        cache_key = standings_cache_key(season_id)

        result = cache.get(cache_key)
        if result is not None:
            current_app.logger.debug(f"Cache hit for key: {cache_key}")
            return result

        result = f(season_id, *args, **kwargs)
        cache.set(
            cache_key,
            result,
            timeout=current_app.config.get("STANDINGS_CACHE_TIMEOUT", 600),
        )
        current_app.logger.debug(f"Cache set for key: {cache_key}")

        return result

    return wrapped


def invalidate_standings(season_id):
    """Drop cached standings for a season"""
    cache_key = standings_cache_key(season_id)
    cache.delete(cache_key)
    current_app.logger.info(f"Cache invalidated: {cache_key}")
