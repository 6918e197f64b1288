"""
Coffee shop directory core.

Responsibilities:
- Hold shops, reviews, favorites and users in an in-memory record store.
- Keep each shop's rating and review count derived from its reviews.
- Filter, order and paginate shops for the search endpoint.
- Enrich shops with their reviews and the caller's favorite flag.
"""
