from .site_validation import run_site_validation

__all__ = [
    'run_site_validation',
]
