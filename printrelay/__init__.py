"""
Print Relay - in-memory print job queue served to polling print agents.

Endpoints:
- POST /api/print/jobs              (X-API-Key)       -> enqueue a job
- GET  /api/print/jobs/pending      (X-Pairing-Token) -> agent poll
- POST /api/print/jobs/{id}/ack     (X-Pairing-Token) -> agent result
- GET  /api/print/jobs/{id}                           -> job lookup
- GET  /healthz                                       -> queue stats
"""

__version__ = "1.0.0"
