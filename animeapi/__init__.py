"""animeapi: anime listings scraped from several streaming sites, served as one JSON schema."""

__version__ = "1.0.0"
