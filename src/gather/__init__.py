"""gather: download remote files, or scrape a listing and download matches."""

__version__ = "0.4.0"
