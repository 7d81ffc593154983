"""
OverSync core — ``src/oversync/core/``.

The engine boundary and the ambient stack.  The
:class:`~oversync.core.backend.SyncBackend` protocol with its HTTP and demo
implementations lives here, together with the wire models, exceptions,
configuration and logging setup.  Nothing in this package imports a UI
toolkit; the controllers that hold state live in ``oversync.ui``.
"""
