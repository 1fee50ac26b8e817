"""
Actor Link.

Finds the shortest chain of co-stars connecting two actors, using a
bidirectional BFS over a SQLite database of movies and their casts
built from TMDB.
"""

__version__ = "0.1.0"
