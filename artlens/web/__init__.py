"""Web evidence collection: trust ranking, page fetching, text extraction, headless rendering."""
