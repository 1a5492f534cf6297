"""Buzzer domain services: session store, arbitration engine, broadcast hub
and CSV export.

Imported by the HTTP blueprints and socket handlers, keeping transport
concerns separated from the session state machine.
"""
