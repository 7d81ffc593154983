"""
OverSync terminal UI — ``src/oversync/ui/``.

The controllers here (bootstrap, onboarding, pairing, poller) and the state
types in ``state.py`` have no Textual dependency and are testable without a
running terminal.  The Textual app and its screens only render controller
state and forward user actions.

Entry point::

    from oversync.ui.app import run
    run(backend)
"""
