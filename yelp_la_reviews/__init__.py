"""Exploratory analysis of scraped Yelp reviews for Los Angeles restaurants."""

__version__ = "0.1.0"
