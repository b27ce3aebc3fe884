"""Scraping microservice: page text and link extraction over HTTP and MCP."""

__version__ = "0.1.0"
