"""Helpers for reading whole result sets through Protean querysets."""


def fetch_all(query) -> list:
    """Every matching record, not just the first page the provider returns."""
    result = query.all()
    if result.total > len(result.items):
        result = query.limit(result.total).all()
    return list(result.items)
