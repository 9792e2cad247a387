# ABOUTME: nikkedex package root
# ABOUTME: Extracts character records from the NIKKE community wiki into a JSON store

__version__ = "0.1.0"
