# Routes package init
"""
FWRCFN Backend — API Routes Package
=====================================

Route Inventory:
    - health.py:   GET  /                  (banner)
                   GET  /api/status        (status probe)
    - auth.py:     POST /api/register      (create account, issue token)
                   POST /api/login         (check credentials, issue token)
    - fridges.py:  GET  /api/fridges       (active fridges)
                   POST /api/sample-data   (seed two sample fridges)

Routes stay thin: parse the request, declare the database dependency, call
a service, return its result.
"""
