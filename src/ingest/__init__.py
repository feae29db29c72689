"""IMDB import pipeline.

This package reads the source CSV files, converts rows into typed
values, and inserts them one at a time into the movie database.
"""
