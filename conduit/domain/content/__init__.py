"""
Content bounded context, domain layer.

Users and their follow relation, articles with tags and favorites,
and comments on articles.
"""
