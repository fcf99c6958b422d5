"""
SRT: Simple Restricted Token

Core imports are lazily loaded so that ``import srt`` stays cheap.
For direct module access, import from submodules:

    from srt.tokens import RestrictedToken, RestrictionEngine
    from srt.exceptions import TransferRestrictedError
"""

# Lazy imports to avoid configuring logging at package import
def __getattr__(name):
    """Lazy module loading."""
    if name == 'RestrictedToken':
        from .tokens import RestrictedToken
        return RestrictedToken
    elif name == 'RestrictionEngine':
        from .tokens import RestrictionEngine
        return RestrictionEngine
    elif name == 'TransferRestrictedError':
        from .exceptions import TransferRestrictedError
        return TransferRestrictedError
    raise AttributeError(f"module 'srt' has no attribute {name!r}")

__all__ = ['RestrictedToken', 'RestrictionEngine', 'TransferRestrictedError']
