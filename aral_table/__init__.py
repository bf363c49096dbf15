"""
Aral table - filterable, column-driven table for Aral resources.

Column descriptors declare what is shown; DataTable holds the filter
state and renders the visible rows through Jinja2 templates.
"""
