"""
OpenVerse web site.

FastAPI application serving the landing page and the Aral resource table,
rendered server-side with Jinja2 and updated in place with htmx.
"""
