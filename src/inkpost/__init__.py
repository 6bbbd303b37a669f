"""inkpost — blog content API.

Users register and log in for a bearer token, then write posts,
file them under categories, and comment on each other's work.
Only a post's author may change or delete it.
"""

__version__ = "0.1.0"
