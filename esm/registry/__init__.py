from .fetcher import SCRIPT_URL_TEMPLATE, fetch, resolve_source, resolve_url

__all__ = ['SCRIPT_URL_TEMPLATE', 'fetch', 'resolve_source', 'resolve_url']
